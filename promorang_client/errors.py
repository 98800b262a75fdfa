"""Error taxonomy for the API client.

Every transport-level failure surfaces as an ``ApiError``:

- ``NETWORK_ERROR``: no response was produced (DNS, connect, timeout, TLS).
  ``status`` is 0, which is reserved for this case.
- server-declared codes from the ``{"error": {"code", "message", "details"}}``
  envelope, passed through verbatim.
- ``UNKNOWN_ERROR``: a non-2xx response without a usable error envelope.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

NETWORK_ERROR = "NETWORK_ERROR"
UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ApiError(Exception):
    """Structured failure raised by the HTTP client and the domain services."""

    code: str = UNKNOWN_ERROR
    message: str = "API request failed"

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        status: int = 0,
        details: Any = None,
        *,
        endpoint: str | None = None,
        method: str | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.code = code or self.__class__.code
        self.status = status
        self.details = details
        self.endpoint = endpoint
        self.method = method
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"ApiError(code={self.code!r}, status={self.status}, message={self.message!r})"

    @property
    def is_network_error(self) -> bool:
        return self.code == NETWORK_ERROR and self.status == 0

    @property
    def is_unauthorized(self) -> bool:
        return self.status == 401

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @property
    def is_server_error(self) -> bool:
        return self.status >= 500

    def to_dict(self) -> dict[str, Any]:
        """Serializable view, suitable for logs and UI error reporting."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "status": self.status,
            "details": self.details,
            "endpoint": self.endpoint,
            "method": self.method,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_envelope(
        cls,
        status: int,
        reason: str,
        body: Any,
        *,
        endpoint: str | None = None,
        method: str | None = None,
    ) -> ApiError:
        """Build an error from a non-2xx response and its parsed body.

        Missing envelope fields are synthesized from the status line.
        """
        error_info: Mapping[str, Any] = {}
        if isinstance(body, Mapping):
            candidate = body.get("error")
            if isinstance(candidate, Mapping):
                error_info = candidate

        code = error_info.get("code")
        message = error_info.get("message")
        details = error_info.get("details")

        return cls(
            message=str(message) if message is not None else f"HTTP Error {status}: {reason}",
            code=str(code) if code is not None else UNKNOWN_ERROR,
            status=status,
            details=details if details is not None else {"status": status, "status_text": reason},
            endpoint=endpoint,
            method=method,
        )

    @classmethod
    def network(
        cls,
        exc: BaseException,
        *,
        url: str,
        endpoint: str | None = None,
        method: str | None = None,
    ) -> ApiError:
        """Wrap a failure that happened before any response existed."""
        return cls(
            message="Network error occurred",
            code=NETWORK_ERROR,
            status=0,
            details={
                "url": url,
                "method": method,
                "original_error": str(exc) or type(exc).__name__,
            },
            endpoint=endpoint,
            method=method,
        )

    def with_context(self, prefix: str) -> ApiError:
        """Copy of this error whose message is prefixed, keeping code and status."""
        return type(self)(
            message=f"{prefix}: {self.message}",
            code=self.code,
            status=self.status,
            details=self.details,
            endpoint=self.endpoint,
            method=self.method,
        )
