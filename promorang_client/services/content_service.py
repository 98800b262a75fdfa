"""Content endpoints: detail, metrics, engagement actions and share purchases.

Reads are normalized into complete view models; failures propagate as
``ApiError`` with the operation named in the message, so callers can show a
per-action error.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from promorang_client.config.fallbacks import FallbackCatalog
from promorang_client.errors import ApiError
from promorang_client.http.client import ApiClient
from promorang_client.http.response import ApiResponse
from promorang_client.normalizers.coerce import as_mapping, to_bool
from promorang_client.normalizers.content import (
    ContentMetrics,
    ContentView,
    derive_seed,
    normalize_content,
    normalize_metrics,
)

SOCIAL_ACTIONS = frozenset({"like", "save", "comment", "share", "view"})


class ContentUserStatus(BaseModel):
    """Whether the signed-in user already liked or saved a piece of content."""

    has_liked: bool = False
    has_saved: bool = False


class ContentService:
    """Typed access to the ``/api/content`` endpoints."""

    def __init__(
        self,
        client: ApiClient,
        catalog: FallbackCatalog | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._catalog = catalog
        self._logger = logger or logging.getLogger(__name__)

    @property
    def catalog(self) -> FallbackCatalog | None:
        return self._catalog

    async def _call(self, action: str, content_id: Any, coro: Any) -> ApiResponse[Any]:
        try:
            return await coro
        except ApiError as exc:
            self._logger.warning(
                "%s failed for content %s: %s",
                action,
                content_id,
                exc.message,
                extra={"content_id": str(content_id), "status": exc.status, "code": exc.code},
            )
            raise exc.with_context(f"Failed to {action}") from exc

    async def get_content(self, content_id: Any) -> ContentView:
        """Fetch and normalize one piece of content."""
        response = await self._call(
            "fetch content", content_id, self._client.get(f"/api/content/{content_id}")
        )
        return normalize_content(response.data, derive_seed(content_id), self._catalog)

    async def get_metrics(self, content_id: Any) -> ContentMetrics:
        response = await self._call(
            "fetch metrics", content_id, self._client.get(f"/api/content/{content_id}/metrics")
        )
        return normalize_metrics(response.data, derive_seed(content_id))

    async def get_user_status(self, content_id: Any) -> ContentUserStatus:
        response = await self._call(
            "fetch content status",
            content_id,
            self._client.get(f"/api/content/{content_id}/user-status"),
        )
        data = as_mapping(response.data) or {}
        return ContentUserStatus(
            has_liked=to_bool(data.get("has_liked")),
            has_saved=to_bool(data.get("has_saved")),
        )

    async def get_sponsorship(self, content_id: Any) -> dict[str, Any] | None:
        response = await self._call(
            "fetch sponsorship",
            content_id,
            self._client.get(f"/api/content/{content_id}/sponsorship"),
        )
        data = as_mapping(response.data)
        # {"sponsorship": null} means the content has no active sponsor
        if data is not None and "sponsorship" in data:
            data = as_mapping(data["sponsorship"])
        return dict(data) if data is not None else None

    async def like(self, content_id: Any) -> ApiResponse[Any]:
        return await self._call(
            "like content", content_id, self._client.post(f"/api/content/{content_id}/like")
        )

    async def unlike(self, content_id: Any) -> ApiResponse[Any]:
        return await self._call(
            "unlike content", content_id, self._client.delete(f"/api/content/{content_id}/like")
        )

    async def save(self, content_id: Any) -> ApiResponse[Any]:
        return await self._call(
            "save content", content_id, self._client.post(f"/api/content/{content_id}/save")
        )

    async def unsave(self, content_id: Any) -> ApiResponse[Any]:
        return await self._call(
            "unsave content", content_id, self._client.delete(f"/api/content/{content_id}/save")
        )

    async def buy_shares(self, content_id: Any, shares_count: int) -> ApiResponse[Any]:
        """Purchase ``shares_count`` shares of a piece of content."""
        if shares_count <= 0:
            raise ValueError("shares_count must be positive")
        return await self._call(
            "buy shares",
            content_id,
            self._client.post(
                "/api/content/buy-shares",
                {"content_id": content_id, "shares_count": shares_count},
            ),
        )

    async def record_social_action(self, action: str, content_id: Any) -> ApiResponse[Any]:
        """Record a like/save/comment/share/view for points accounting."""
        if action not in SOCIAL_ACTIONS:
            raise ValueError(f"Unknown social action: {action}")
        return await self._call(
            f"record {action} action",
            content_id,
            self._client.post(
                "/api/users/social-action",
                {"action_type": action, "reference_id": content_id, "reference_type": "content"},
            ),
        )
