"""User endpoints: current user, public profiles, wallets and user content."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from promorang_client.errors import ApiError
from promorang_client.http.client import ApiClient
from promorang_client.http.response import ApiResponse, unwrap_resource
from promorang_client.normalizers.coerce import as_mapping, to_float, to_text
from promorang_client.normalizers.content import ContentView, derive_seed, normalize_content
from promorang_client.normalizers.profile import ProfileUser, adapt_profile_user


class Wallet(BaseModel):
    id: str
    user_id: str
    currency_type: str
    balance: float
    created_at: str
    updated_at: str


class PublicProfile(BaseModel):
    """Everything the public profile endpoint returns, normalized."""

    user: ProfileUser | None
    content: list[ContentView]
    leaderboard_position: dict[str, Any] | None


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def normalize_wallet(raw: Any) -> Wallet | None:
    """Wallet with numeric balance, or None for non-object entries."""
    record = as_mapping(raw)
    if record is None:
        return None
    return Wallet(
        id=to_text(record.get("id"), ""),
        user_id=to_text(record.get("user_id"), ""),
        currency_type=to_text(record.get("currency_type"), ""),
        balance=to_float(record.get("balance"), 0.0),
        created_at=to_text(record.get("created_at"), ""),
        updated_at=to_text(record.get("updated_at"), ""),
    )


def normalize_content_list(raw: Any) -> list[ContentView]:
    """Normalize every object entry of a content list; other entries are dropped."""
    views: list[ContentView] = []
    for item in _as_list(unwrap_resource(raw, "content")):
        record = as_mapping(item)
        if record is None:
            continue
        views.append(normalize_content(record, derive_seed(record.get("id"))))
    return views


class UserService:
    """Typed access to the ``/api/users`` endpoints."""

    def __init__(self, client: ApiClient, logger: logging.Logger | None = None) -> None:
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    async def _call(self, action: str, coro: Any, user_id: Any = None) -> ApiResponse[Any]:
        try:
            return await coro
        except ApiError as exc:
            self._logger.warning(
                "%s failed: %s",
                action,
                exc.message,
                extra={"user_id": str(user_id) if user_id is not None else None, "status": exc.status},
            )
            raise exc.with_context(f"Failed to {action}") from exc

    async def get_current_user(self) -> ProfileUser | None:
        """The signed-in user, or None when the server returns no user object."""
        response = await self._call("fetch current user", self._client.get("/api/users/me"))
        return adapt_profile_user(response.data)

    async def get_public_profile(
        self, username: str | None = None, user_id: Any = None
    ) -> PublicProfile:
        if user_id is not None:
            path = f"/api/users/public/id/{user_id}"
        elif username:
            path = f"/api/users/public/{username}"
        else:
            raise ValueError("No user identifier provided")

        response = await self._call(
            "fetch public profile", self._client.get(path), user_id or username
        )
        data = as_mapping(response.data) or {}
        position = as_mapping(data.get("leaderboard_position"))
        return PublicProfile(
            user=adapt_profile_user(data.get("user")),
            content=normalize_content_list(data.get("content")),
            leaderboard_position=dict(position) if position is not None else None,
        )

    async def get_wallets(self) -> list[Wallet]:
        response = await self._call("fetch wallets", self._client.get("/api/users/me/wallets"))
        wallets = (normalize_wallet(item) for item in _as_list(unwrap_resource(response.data, "wallets")))
        return [wallet for wallet in wallets if wallet is not None]

    async def get_user_content(self, user_id: Any) -> list[ContentView]:
        response = await self._call(
            "fetch user content", self._client.get(f"/api/users/{user_id}/content"), user_id
        )
        return normalize_content_list(response.data)

    async def get_leaderboard_position(self, user_id: Any) -> dict[str, Any] | None:
        response = await self._call(
            "fetch leaderboard position",
            self._client.get(f"/api/users/{user_id}/leaderboard-position"),
            user_id,
        )
        position = as_mapping(response.data)
        return dict(position) if position is not None else None
