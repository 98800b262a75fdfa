"""Response envelope models.

Successful calls resolve to ``ApiResponse(data=..., status=...)``; failures
are raised as ``ApiError``, so ``error`` is only populated when a caller
builds a terminal result from a caught error (e.g. for UI state).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from promorang_client.errors import ApiError

T = TypeVar("T")


class ErrorInfo(BaseModel):
    """The ``error`` member of the response envelope."""

    code: str
    message: str
    details: Any = None


class ApiResponse(BaseModel, Generic[T]):
    """Terminal result of one HTTP call."""

    data: T | None = None
    error: ErrorInfo | None = None
    status: int

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_error(cls, exc: ApiError) -> ApiResponse[Any]:
        return cls(
            error=ErrorInfo(code=exc.code, message=exc.message, details=exc.details),
            status=exc.status,
        )


def unwrap_resource(payload: Any, key: str) -> Any:
    """Return ``payload[key]`` for ``{key: ...}`` wrappers, else the payload itself."""
    if isinstance(payload, Mapping) and payload.get(key) is not None:
        return payload[key]
    return payload
