"""Profile adaptation.

Two raw user shapes reach the profile screen:

- ``SessionUser``: the authenticated "me" record handed over by the session
  (``id``, ``email``, ``username``, ``display_name``, ``user_type``,
  ``avatar_url`` and balances, sometimes with ``bio``, ``level`` and the
  other profile fields).
- ``LegacyUser``: the public-profile record (``profile_image``,
  ``xp_points``, ``follower_count``, ...).

Both are adapted into one ``ProfileUser`` with every field filled: numbers
default to 0 (level to 1) and strings to "", so arithmetic on a profile
never meets a missing value.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict

from promorang_client.normalizers.coerce import as_mapping, to_int, to_text

# Keys only the public-profile record carries
_LEGACY_MARKERS = frozenset({
    "profile_image",
    "xp_points",
    "follower_count",
    "following_count",
    "mocha_user_id",
    "cover_image",
    "social_links",
})

LEVEL_XP_STEP = 1000


class SessionUser(BaseModel):
    """Authenticated session user."""

    model_config = ConfigDict(extra="ignore")

    id: Any = None
    email: Any = None
    username: Any = None
    display_name: Any = None
    user_type: Any = None
    avatar_url: Any = None
    bio: Any = None
    location: Any = None
    xp: Any = None
    level: Any = None
    drops_completed: Any = None
    shares_owned: Any = None
    referral_code: Any = None
    created_at: Any = None
    points_balance: Any = None
    keys_balance: Any = None
    gems_balance: Any = None


class LegacyUser(BaseModel):
    """Public-profile user record."""

    model_config = ConfigDict(extra="ignore")

    id: Any = None
    email: Any = None
    username: Any = None
    display_name: Any = None
    user_type: Any = None
    profile_image: Any = None
    bio: Any = None
    location: Any = None
    xp_points: Any = None
    level: Any = None
    follower_count: Any = None
    following_count: Any = None
    drops_completed: Any = None
    shares_owned: Any = None
    social_links: Any = None
    referral_code: Any = None
    created_at: Any = None
    points_balance: Any = None
    keys_balance: Any = None
    gems_balance: Any = None


class ProfileUser(BaseModel):
    """The single profile shape the UI renders."""

    id: str
    email: str
    username: str
    display_name: str
    avatar_url: str | None
    bio: str
    location: str
    user_type: str
    xp: int
    level: int
    followers: int
    following: int
    drops_completed: int
    shares_owned: int
    social: dict[str, str]
    referral_code: str | None
    created_at: str
    points_balance: int = 0
    keys_balance: int = 0
    gems_balance: int = 0



def unwrap_user_payload(payload: Any) -> Any:
    """``payload.user``, then ``payload.data.user``, else the payload itself."""
    mapping = as_mapping(payload)
    if mapping is None:
        return payload
    user = as_mapping(mapping.get("user"))
    if user is not None:
        return user
    data = as_mapping(mapping.get("data"))
    if data is not None:
        nested = as_mapping(data.get("user"))
        if nested is not None:
            return nested
    return mapping


def _common_fields(raw: SessionUser | LegacyUser) -> dict[str, Any]:
    """Fields both shapes carry under the same name."""
    username = to_text(raw.username, "") or "unknown_user"
    referral = to_text(raw.referral_code, "")
    return {
        "id": to_text(raw.id, ""),
        "email": to_text(raw.email, ""),
        "username": username,
        "display_name": to_text(raw.display_name, "") or to_text(raw.username, "") or "Unknown User",
        "user_type": to_text(raw.user_type, ""),
        "bio": to_text(raw.bio, ""),
        "location": to_text(raw.location, ""),
        "level": to_int(raw.level, 1),
        "drops_completed": to_int(raw.drops_completed, 0),
        "shares_owned": to_int(raw.shares_owned, 0),
        "referral_code": referral or None,
        "created_at": to_text(raw.created_at, ""),
        "points_balance": to_int(raw.points_balance, 0),
        "keys_balance": to_int(raw.keys_balance, 0),
        "gems_balance": to_int(raw.gems_balance, 0),
    }


def _social(value: Any) -> dict[str, str]:
    # social_links arrives as a JSON string from older endpoints
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except (ValueError, RecursionError):
            return {}
    mapping = as_mapping(value)
    if mapping is None:
        return {}
    return {key: text for key, item in mapping.items() if (text := to_text(item, ""))}


def adapt_session_user(raw: Any) -> ProfileUser | None:
    """Adapt the authenticated session shape; None when ``raw`` is not a mapping."""
    mapping = as_mapping(raw)
    if mapping is None:
        return None
    user = SessionUser.model_validate(dict(mapping))
    avatar = to_text(user.avatar_url, "")
    return ProfileUser(
        **_common_fields(user),
        avatar_url=avatar or None,
        xp=to_int(user.xp, 0),
        followers=0,
        following=0,
        social={},
    )


def adapt_legacy_user(raw: Any) -> ProfileUser | None:
    """Adapt the public-profile shape; None when ``raw`` is not a mapping."""
    mapping = as_mapping(raw)
    if mapping is None:
        return None
    user = LegacyUser.model_validate(dict(mapping))
    avatar = to_text(user.profile_image, "")
    return ProfileUser(
        **_common_fields(user),
        avatar_url=avatar or None,
        xp=to_int(user.xp_points, 0),
        followers=to_int(user.follower_count, 0),
        following=to_int(user.following_count, 0),
        social=_social(user.social_links),
    )



def adapt_profile_user(raw: Any) -> ProfileUser | None:
    """Adapt either raw shape, unwrapping ``{"user": ...}`` envelopes first."""
    mapping = as_mapping(unwrap_user_payload(raw))
    if mapping is None:
        return None
    if _LEGACY_MARKERS.intersection(mapping):
        return adapt_legacy_user(mapping)
    return adapt_session_user(mapping)


def profile_to_legacy(profile: ProfileUser) -> dict[str, Any]:
    """Reverse adapter for edit forms that still submit the legacy shape."""
    return {
        "id": profile.id,
        "email": profile.email,
        "username": profile.username,
        "display_name": profile.display_name,
        "user_type": profile.user_type,
        "profile_image": profile.avatar_url or "",
        "bio": profile.bio,
        "location": profile.location,
        "xp_points": profile.xp,
        "level": profile.level,
        "follower_count": profile.followers,
        "following_count": profile.following,
        "drops_completed": profile.drops_completed,
        "shares_owned": profile.shares_owned,
        "social_links": dict(profile.social),
        "referral_code": profile.referral_code,
        "created_at": profile.created_at,
        "points_balance": profile.points_balance,
        "keys_balance": profile.keys_balance,
        "gems_balance": profile.gems_balance,
    }


def level_progress(profile: ProfileUser) -> float:
    """Percent of the way to the next level threshold, ``(level + 1) * 1000`` XP."""
    threshold = (max(profile.level, 0) + 1) * LEVEL_XP_STEP
    percent = profile.xp / threshold * 100
    return min(max(percent, 0.0), 100.0)
