"""Content detail loader.

Fans out the independent requests a content detail screen needs (content,
wallets, current user, metrics, sponsorship) and merges each result into a
``ContentDetailState`` as soon as it settles. No ordering is guaranteed
between the requests.

The state holder's ``mounted`` flag is the only cancellation mechanism: a
request still completes over the wire after ``unmount()``, but its result
is discarded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from promorang_client.errors import ApiError
from promorang_client.http.response import ApiResponse
from promorang_client.identity import (
    UNKNOWN_OWNERSHIP,
    Ownership,
    resolve_content_ownership,
)
from promorang_client.normalizers.content import (
    ContentMetrics,
    ContentView,
    derive_seed,
    fallback_metrics,
    normalize_content,
)
from promorang_client.normalizers.profile import ProfileUser
from promorang_client.services.content_service import ContentService
from promorang_client.services.user_service import UserService, Wallet

T = TypeVar("T")

ALL_SECTIONS = ("content", "wallets", "user", "metrics", "sponsorship")


@dataclass
class ContentDetailState:
    """In-memory holder owned by one content detail screen."""

    content_id: Any
    content: ContentView | None = None
    metrics: ContentMetrics | None = None
    wallets: list[Wallet] = field(default_factory=list)
    user: ProfileUser | None = None
    sponsorship: dict[str, Any] | None = None
    ownership: Ownership = UNKNOWN_OWNERSHIP
    errors: dict[str, ApiError] = field(default_factory=dict)
    loading: bool = False
    mounted: bool = True

    def unmount(self) -> None:
        self.mounted = False

    def error_results(self) -> dict[str, ApiResponse[Any]]:
        """Failed sections as terminal results, for per-section error banners."""
        return {section: ApiResponse.from_error(exc) for section, exc in self.errors.items()}


class ContentDetailLoader:
    """Loads and refreshes a ``ContentDetailState``."""

    def __init__(
        self,
        content_service: ContentService,
        user_service: UserService,
        state: ContentDetailState,
        logger: logging.Logger | None = None,
    ) -> None:
        self._content = content_service
        self._users = user_service
        self.state = state
        self._seed = derive_seed(state.content_id)
        self._logger = logger or logging.getLogger(__name__)

    async def load(self, sections: tuple[str, ...] = ALL_SECTIONS) -> ContentDetailState:
        """Fetch the requested sections concurrently and wait for all to settle."""
        unknown = set(sections) - set(ALL_SECTIONS)
        if unknown:
            raise ValueError(f"Unknown sections: {sorted(unknown)}")
        if not self.state.mounted:
            return self.state

        self.state.loading = True
        loaders: dict[str, Callable[[], Awaitable[None]]] = {
            "content": self._load_content,
            "wallets": self._load_wallets,
            "user": self._load_user,
            "metrics": self._load_metrics,
            "sponsorship": self._load_sponsorship,
        }
        results = await asyncio.gather(
            *(loaders[name]() for name in sections),
            return_exceptions=True,
        )
        if self.state.mounted:
            self.state.loading = False

        # ApiErrors were absorbed per section; anything else is a bug
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return self.state

    async def buy_shares(self, shares_count: int) -> None:
        """Buy shares, then refresh the sections the purchase changes."""
        await self._content.buy_shares(self.state.content_id, shares_count)
        await self.load(("content", "wallets", "metrics"))

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    async def _settle(
        self,
        section: str,
        fetch: Awaitable[T],
        apply: Callable[[T], None],
        degrade: Callable[[], None] | None = None,
    ) -> None:
        try:
            value = await fetch
        except ApiError as exc:
            if not self.state.mounted:
                return
            self._logger.warning(
                "Content detail section %s failed: %s",
                section,
                exc.message,
                extra={
                    "content_id": str(self.state.content_id),
                    "status": exc.status,
                    "code": exc.code,
                },
            )
            self.state.errors[section] = exc
            if degrade is not None:
                degrade()
            self._refresh_ownership()
            return

        if not self.state.mounted:
            self._logger.debug("Discarding %s result after unmount", section)
            return
        self.state.errors.pop(section, None)
        apply(value)
        self._refresh_ownership()

    def _refresh_ownership(self) -> None:
        self.state.ownership = resolve_content_ownership(self.state.content, self.state.user)

    async def _load_content(self) -> None:
        def degrade() -> None:
            self.state.content = normalize_content(None, self._seed, self._content.catalog)

        await self._settle(
            "content",
            self._content.get_content(self.state.content_id),
            lambda content: setattr(self.state, "content", content),
            degrade,
        )

    async def _load_wallets(self) -> None:
        await self._settle(
            "wallets",
            self._users.get_wallets(),
            lambda wallets: setattr(self.state, "wallets", wallets),
        )

    async def _load_user(self) -> None:
        await self._settle(
            "user",
            self._users.get_current_user(),
            lambda user: setattr(self.state, "user", user),
        )

    async def _load_metrics(self) -> None:
        def degrade() -> None:
            self.state.metrics = fallback_metrics(self._seed)

        await self._settle(
            "metrics",
            self._content.get_metrics(self.state.content_id),
            lambda metrics: setattr(self.state, "metrics", metrics),
            degrade,
        )

    async def _load_sponsorship(self) -> None:
        await self._settle(
            "sponsorship",
            self._content.get_sponsorship(self.state.content_id),
            lambda sponsorship: setattr(self.state, "sponsorship", sponsorship),
        )
