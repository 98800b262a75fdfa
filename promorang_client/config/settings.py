"""Pydantic Settings for the Promorang API client.

All environment variables use the PROMORANG_ prefix.
Example: PROMORANG_ENVIRONMENT=production, PROMORANG_API_URL=http://localhost:3001
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ClientSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    # Environment
    environment: str = "development"

    # Base URL resolution
    api_url: str | None = None  # Explicit override, may point at loopback
    browser_origin: str | None = None  # Origin the hosting page is served from
    production_api_url: str = "https://api.promorang.co"
    default_api_url: str = "http://localhost:3001"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    debug_http: bool = False  # Per-request debug logs, headers redacted

    # Fallback catalogue override (YAML); None uses the bundled file
    fallbacks_path: str | None = None

    model_config = {"env_prefix": "PROMORANG_"}

    @field_validator("environment")
    @classmethod
    def _lower_environment(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
