"""Base URL resolution for the API client.

The base origin is resolved once at startup from the environment settings and
the browser origin (when the client runs behind a hosting page). Every
candidate is stripped of a trailing ``/api`` so request paths that already
carry the ``/api`` prefix never end up doubled.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from urllib.parse import urlparse

from promorang_client.config.settings import ClientSettings

logger = logging.getLogger(__name__)

_API_SUFFIX_RE = re.compile(r"/api/*$", re.IGNORECASE)

_LOOPBACK_HOSTNAMES = frozenset({"localhost", "0.0.0.0"})


def strip_api_suffix(url: str) -> str:
    """Trim whitespace, trailing slashes and a trailing ``/api`` segment."""
    cleaned = url.strip().rstrip("/")
    parsed = urlparse(cleaned)
    if not parsed.netloc:
        return cleaned
    path = _API_SUFFIX_RE.sub("", parsed.path).rstrip("/")
    return parsed._replace(path=path).geturl()


def is_loopback_url(url: str) -> bool:
    """Return True when the URL's host is a loopback address."""
    host = urlparse(url if "://" in url else f"//{url}").hostname
    if not host:
        return False
    host = host.lower()
    if host in _LOOPBACK_HOSTNAMES or host.endswith(".localhost"):
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def resolve_base_url(settings: ClientSettings) -> str:
    """Pick the API origin for this runtime.

    Order:
    1. Production always talks to the fixed external origin.
    2. An explicit ``api_url`` override wins, unless it points at loopback
       while the browser itself is served from a non-loopback origin; then
       the browser origin is used.
    3. The browser origin.
    4. The local default.
    """
    if settings.is_production:
        base = strip_api_suffix(settings.production_api_url)
        logger.info("Resolved API base URL %s (production)", base)
        return base

    browser_origin = (settings.browser_origin or "").strip()
    override = (settings.api_url or "").strip()

    if override:
        if (
            browser_origin
            and is_loopback_url(override)
            and not is_loopback_url(browser_origin)
        ):
            logger.warning(
                "API override %s is loopback but browser origin %s is not; using browser origin",
                override,
                browser_origin,
            )
            base = strip_api_suffix(browser_origin)
        else:
            base = strip_api_suffix(override)
    elif browser_origin:
        base = strip_api_suffix(browser_origin)
    else:
        base = strip_api_suffix(settings.default_api_url)

    logger.info("Resolved API base URL %s", base)
    return base
