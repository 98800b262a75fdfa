"""Domain normalizers: raw server payloads into complete, render-safe models."""

from promorang_client.normalizers.content import (
    AbsentContent,
    ContentEnvelope,
    ContentMetrics,
    ContentView,
    RawContent,
    WrappedContent,
    build_fallback_content,
    derive_seed,
    fallback_image,
    fallback_metrics,
    normalize_content,
    normalize_metrics,
    resolve_content_envelope,
)
from promorang_client.normalizers.profile import (
    LegacyUser,
    ProfileUser,
    SessionUser,
    adapt_legacy_user,
    adapt_profile_user,
    adapt_session_user,
    level_progress,
    profile_to_legacy,
    unwrap_user_payload,
)

__all__ = [
    "AbsentContent",
    "ContentEnvelope",
    "ContentMetrics",
    "ContentView",
    "LegacyUser",
    "ProfileUser",
    "RawContent",
    "SessionUser",
    "WrappedContent",
    "adapt_legacy_user",
    "adapt_profile_user",
    "adapt_session_user",
    "build_fallback_content",
    "derive_seed",
    "fallback_image",
    "fallback_metrics",
    "level_progress",
    "normalize_content",
    "normalize_metrics",
    "profile_to_legacy",
    "resolve_content_envelope",
    "unwrap_user_payload",
]
