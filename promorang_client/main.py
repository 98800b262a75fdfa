"""Client entry point.

Startup: validate settings, configure logging, load the fallback catalogue,
resolve the base URL once and wire the domain services to one HTTP client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from promorang_client.config.fallbacks import FallbackCatalog, load_fallback_catalog
from promorang_client.config.settings import ClientSettings
from promorang_client.http.client import ApiClient, AuthHeaderBuilder
from promorang_client.logging_config import configure_logging
from promorang_client.services.content_detail import ContentDetailLoader, ContentDetailState
from promorang_client.services.content_service import ContentService
from promorang_client.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass
class PromorangClient:
    """Everything a UI layer needs, built from one ``ClientSettings``."""

    settings: ClientSettings
    api: ApiClient
    catalog: FallbackCatalog
    content: ContentService
    users: UserService

    def content_detail(self, content_id: Any) -> ContentDetailLoader:
        """A loader bound to a fresh state holder for one detail screen."""
        return ContentDetailLoader(self.content, self.users, ContentDetailState(content_id=content_id))


def create_client(
    settings: ClientSettings | None = None,
    auth_headers: AuthHeaderBuilder | None = None,
    *,
    setup_logging: bool = True,
    **client_kwargs: Any,
) -> PromorangClient:
    """Build the client stack.

    ``client_kwargs`` are passed to ``ApiClient`` (``cookies``,
    ``transport``, ``logger``).
    """
    settings = settings or ClientSettings()

    if setup_logging:
        configure_logging(settings.log_level, json_output=settings.log_json)

    catalog = load_fallback_catalog(settings.fallbacks_path)
    api = ApiClient.from_settings(settings, auth_headers, **client_kwargs)
    logger.info("Promorang client ready (%s)", settings.environment)

    return PromorangClient(
        settings=settings,
        api=api,
        catalog=catalog,
        content=ContentService(api, catalog),
        users=UserService(api),
    )
