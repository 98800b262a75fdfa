"""Configuration module: settings, base URL resolution and fallback catalogue."""

from promorang_client.config.base_url import resolve_base_url, strip_api_suffix
from promorang_client.config.fallbacks import (
    FallbackCatalog,
    default_catalog,
    load_fallback_catalog,
)
from promorang_client.config.settings import ClientSettings

__all__ = [
    "ClientSettings",
    "FallbackCatalog",
    "default_catalog",
    "load_fallback_catalog",
    "resolve_base_url",
    "strip_api_suffix",
]
