"""Content normalization.

Turns whatever the content endpoints return (``None``, a bare record, or a
``{"content": {...}}`` wrapper) into a complete ``ContentView``:

1. The payload is resolved once into a tagged envelope (wrapped/raw/absent).
2. A placeholder record is built purely from an integer seed, so the same
   seed always yields the same placeholder.
3. Each output field takes the raw value when present, else the placeholder
   value, coerced to the field's type.
4. Media URLs are only accepted when they are http(s) URLs.
5. ``is_claimed`` falls back to ``status == "published"``.

Every function here is total: malformed input degrades to placeholder values
and nothing raises.
"""

from __future__ import annotations

import json
import math
import zlib
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from promorang_client.config.fallbacks import FallbackCatalog, default_catalog
from promorang_client.normalizers.coerce import (
    as_mapping,
    first_present,
    is_http_url,
    to_bool,
    to_float,
    to_int,
    to_number,
    to_text,
)

# Placeholder timestamps are anchored here instead of the wall clock
_FALLBACK_EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)

_DEFAULT_ENGAGEMENT_RATE = 0.128


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ContentView(BaseModel):
    """Render-safe content record.

    Unknown raw fields are kept as extras, so the view is a superset of the
    server record.
    """

    model_config = ConfigDict(extra="allow")

    id: int | str
    creator_id: int | str
    creator_username: str
    creator_name: str
    creator_avatar: str
    platform: str
    platform_url: str
    title: str
    description: str
    media_url: str
    total_shares: int
    available_shares: int
    engagement_shares_total: int
    engagement_shares_remaining: int
    share_price: float
    current_revenue: float
    performance_metrics: str  # JSON document
    views_count: int
    likes_count: int
    comments_count: int
    reposts_count: int
    is_demo: bool
    is_sponsored: bool
    is_claimed: bool
    created_at: str
    updated_at: str


class ContentMetrics(BaseModel):
    """Engagement counters for one piece of content."""

    model_config = ConfigDict(extra="allow")

    likes: int
    comments: int
    shares: int
    views: int
    internal_moves: int
    external_moves: int
    total_engagement: int


@dataclass(frozen=True)
class WrappedContent:
    content: Mapping[str, Any]
    kind: Literal["wrapped"] = "wrapped"


@dataclass(frozen=True)
class RawContent:
    value: Mapping[str, Any]
    kind: Literal["raw"] = "raw"


@dataclass(frozen=True)
class AbsentContent:
    kind: Literal["absent"] = "absent"


ContentEnvelope = WrappedContent | RawContent | AbsentContent


# ---------------------------------------------------------------------------
# Seeds and placeholders
# ---------------------------------------------------------------------------


def derive_seed(identifier: Any) -> int:
    """Deterministic integer seed for a content identifier.

    Numeric identifiers map to themselves; any other string maps to the
    CRC32 of its UTF-8 bytes. A missing identifier maps to 0.
    """
    if identifier is None or isinstance(identifier, bool):
        return 0
    if isinstance(identifier, int):
        return identifier
    if isinstance(identifier, float):
        return int(identifier) if math.isfinite(identifier) else 0
    text = str(identifier).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        return zlib.crc32(text.encode("utf-8"))


def fallback_image(seed: int, catalog: FallbackCatalog | None = None) -> str:
    """Placeholder image URL: pool index ``|seed| mod N``, tagged with the seed."""
    images = (catalog or default_catalog()).images
    return f"{images[abs(seed) % len(images)]}&sig={seed}"


def _fallback_performance(seed: int) -> dict[str, Any]:
    return {
        "impressions": 98000 + abs(seed) % 500,
        "clicks": 12500,
        "conversions": 1320,
        "engagement_rate": _DEFAULT_ENGAGEMENT_RATE,
    }


def build_fallback_content(seed: int, catalog: FallbackCatalog | None = None) -> ContentView:
    """Placeholder content computed only from ``seed``."""
    catalog = catalog or default_catalog()
    offset = abs(seed)
    updated = _FALLBACK_EPOCH + timedelta(minutes=offset % 1440)
    created = updated - timedelta(hours=48)
    performance = _fallback_performance(seed)

    return ContentView(
        id=seed,
        creator_id=1000 + seed,
        creator_username=catalog.creator.username,
        creator_name=catalog.creator.name,
        creator_avatar=catalog.creator.avatar,
        platform=catalog.content.platform,
        platform_url=catalog.content.platform_url,
        title=catalog.content.title,
        description=catalog.content.description,
        media_url=fallback_image(seed, catalog),
        total_shares=3500,
        available_shares=1240,
        engagement_shares_total=3200,
        engagement_shares_remaining=880,
        share_price=12.5,
        current_revenue=8450.0,
        performance_metrics=json.dumps(performance),
        views_count=performance["impressions"],
        likes_count=15420 + offset % 250,
        comments_count=2450 + offset % 150,
        reposts_count=1200 + offset % 80,
        is_demo=True,
        is_sponsored=False,
        is_claimed=False,
        created_at=created.isoformat(),
        updated_at=updated.isoformat(),
    )


# ---------------------------------------------------------------------------
# Envelope resolution
# ---------------------------------------------------------------------------


def resolve_content_envelope(payload: Any) -> ContentEnvelope:
    """Classify a content payload once, at the boundary."""
    mapping = as_mapping(payload)
    if mapping is None:
        return AbsentContent()
    inner = as_mapping(mapping.get("content"))
    if inner is not None:
        return WrappedContent(content=inner)
    return RawContent(value=mapping)


def envelope_record(envelope: ContentEnvelope) -> Mapping[str, Any] | None:
    if isinstance(envelope, WrappedContent):
        return envelope.content
    if isinstance(envelope, RawContent):
        return envelope.value
    return None


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _coerce_id(value: Any, fallback: int | str) -> int | str:
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else fallback
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return fallback
        try:
            return int(text)
        except ValueError:
            return text
    return fallback


def _flag(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key)
    return default if value is None else to_bool(value)


def _performance_metrics(raw: Mapping[str, Any], seed: int) -> str:
    value = raw.get("performance_metrics")
    if isinstance(value, str):
        return value
    defaults = _fallback_performance(seed)
    source = as_mapping(value) or raw
    return json.dumps({
        "impressions": to_number(source.get("impressions"), defaults["impressions"]),
        "clicks": to_number(source.get("clicks"), defaults["clicks"]),
        "conversions": to_number(source.get("conversions"), defaults["conversions"]),
        "engagement_rate": to_number(source.get("engagement_rate"), defaults["engagement_rate"]),
    })


def normalize_content(
    raw: Any,
    seed: int,
    catalog: FallbackCatalog | None = None,
) -> ContentView:
    """Merge a raw content payload over the placeholder for ``seed``.

    ``raw`` may be anything; wrapped payloads are unwrapped first.
    """
    catalog = catalog or default_catalog()
    fallback = build_fallback_content(seed, catalog)
    record = envelope_record(resolve_content_envelope(raw))
    if record is None:
        return fallback

    content_id = _coerce_id(record.get("id"), seed)
    media_url = record.get("media_url")
    if not is_http_url(media_url):
        media_url = fallback_image(derive_seed(content_id), catalog)

    is_claimed = record.get("is_claimed")
    if is_claimed is None:
        is_claimed = record.get("status") == "published"

    extras = {
        key: value
        for key, value in record.items()
        if key not in ContentView.model_fields and not key.startswith("_")
    }

    return ContentView.model_validate({
        **extras,
        "id": content_id,
        "creator_id": _coerce_id(record.get("creator_id"), fallback.creator_id),
        "creator_username": to_text(record.get("creator_username"), fallback.creator_username),
        "creator_name": to_text(record.get("creator_name"), fallback.creator_name),
        "creator_avatar": to_text(record.get("creator_avatar"), fallback.creator_avatar),
        "platform": to_text(record.get("platform"), fallback.platform),
        "platform_url": to_text(
            first_present(record, "platform_url", "content_url"), fallback.platform_url
        ),
        "title": to_text(record.get("title"), fallback.title),
        "description": to_text(record.get("description"), fallback.description),
        "media_url": media_url.strip(),
        "total_shares": to_int(record.get("total_shares"), fallback.total_shares),
        "available_shares": to_int(record.get("available_shares"), fallback.available_shares),
        "engagement_shares_total": to_int(
            record.get("engagement_shares_total"), fallback.engagement_shares_total
        ),
        "engagement_shares_remaining": to_int(
            record.get("engagement_shares_remaining"), fallback.engagement_shares_remaining
        ),
        "share_price": to_float(record.get("share_price"), fallback.share_price),
        "current_revenue": to_float(record.get("current_revenue"), fallback.current_revenue),
        "performance_metrics": _performance_metrics(record, seed),
        "views_count": to_int(
            first_present(record, "views_count", "impressions"), fallback.views_count
        ),
        "likes_count": to_int(first_present(record, "likes_count", "likes"), fallback.likes_count),
        "comments_count": to_int(
            first_present(record, "comments_count", "comments"), fallback.comments_count
        ),
        "reposts_count": to_int(
            first_present(record, "reposts_count", "shares"), fallback.reposts_count
        ),
        "is_demo": _flag(record, "is_demo", fallback.is_demo),
        "is_sponsored": _flag(record, "is_sponsored", fallback.is_sponsored),
        "is_claimed": to_bool(is_claimed),
        "created_at": to_text(record.get("created_at"), fallback.created_at),
        "updated_at": to_text(
            first_present(record, "updated_at", "created_at"), fallback.updated_at
        ),
    })


def fallback_metrics(seed: int) -> ContentMetrics:
    """Placeholder engagement counters computed only from ``seed``."""
    offset = abs(seed)
    return ContentMetrics(
        likes=14500 + offset % 500,
        comments=2800 + offset % 250,
        shares=1200 + offset % 150,
        views=98000 + offset % 5000,
        internal_moves=420 + offset % 80,
        external_moves=215 + offset % 40,
        total_engagement=14500 + offset % 1000,
    )


def normalize_metrics(raw: Any, seed: int) -> ContentMetrics:
    """Merge a raw metrics payload (optionally ``{"metrics": {...}}``) over the placeholder."""
    fallback = fallback_metrics(seed)
    mapping = as_mapping(raw)
    if mapping is None:
        return fallback
    record = as_mapping(mapping.get("metrics")) or mapping

    return ContentMetrics(
        likes=to_int(record.get("likes"), fallback.likes),
        comments=to_int(record.get("comments"), fallback.comments),
        shares=to_int(record.get("shares"), fallback.shares),
        views=to_int(record.get("views"), fallback.views),
        internal_moves=to_int(record.get("internal_moves"), fallback.internal_moves),
        external_moves=to_int(record.get("external_moves"), fallback.external_moves),
        total_engagement=to_int(record.get("total_engagement"), fallback.total_engagement),
    )
