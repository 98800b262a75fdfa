"""Fallback catalogue models and YAML loader.

Provides typed Pydantic models for the deterministic placeholder data used
by the content normalizer, and a loader that parses the YAML config into
those models.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

BUNDLED_CATALOG_PATH = Path(__file__).with_name("fallbacks.yaml")


class FallbackCreator(BaseModel):
    """Demo creator shown on placeholder content."""

    username: str = "demo_creator"
    name: str = "Demo Creator"
    avatar: str = "https://api.dicebear.com/7.x/avataaars/svg?seed=demo_content"


class FallbackContentText(BaseModel):
    """Static text fields of placeholder content."""

    platform: str = "instagram"
    platform_url: str = "https://instagram.com/promorang"
    title: str = "Demo Growth Content Spotlight"
    description: str = "Experience a highlight clip from our creator community."


class FallbackCatalog(BaseModel):
    """Everything the content normalizer needs to build placeholder content."""

    images: list[str] = Field(min_length=1)
    creator: FallbackCreator = FallbackCreator()
    content: FallbackContentText = FallbackContentText()


def _parse_catalog(path: Path) -> FallbackCatalog | None:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Failed to read fallback catalogue at %s: %s", path, exc)
        return None

    try:
        return FallbackCatalog.model_validate(raw)
    except ValidationError as exc:
        logger.error("Invalid fallback catalogue at %s: %s", path, exc)
        return None


@lru_cache(maxsize=1)
def default_catalog() -> FallbackCatalog:
    """The catalogue bundled with the package."""
    catalog = _parse_catalog(BUNDLED_CATALOG_PATH)
    if catalog is None:
        raise RuntimeError(f"Bundled fallback catalogue is unusable: {BUNDLED_CATALOG_PATH}")
    return catalog


def load_fallback_catalog(yaml_path: str | None) -> FallbackCatalog:
    """Parse a fallback catalogue YAML file.

    Args:
        yaml_path: Path to the YAML file, or None for the bundled catalogue.

    Returns:
        The parsed catalogue. A missing, unparsable or invalid file falls back
        to the bundled catalogue.
    """
    if yaml_path is None:
        return default_catalog()

    path = Path(yaml_path)
    if not path.exists():
        logger.warning("Fallback catalogue not found at %s, using bundled defaults", yaml_path)
        return default_catalog()

    catalog = _parse_catalog(path)
    if catalog is None:
        return default_catalog()
    return catalog
