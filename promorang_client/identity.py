"""Ownership resolution between a viewed resource and the signed-in user.

Ownership is ``unknown`` until both sides are loaded, then ``resolved``.
The comparison is string identity of the two ids; usernames are never
compared, since two accounts can share a derived username fragment.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from promorang_client.normalizers.content import ContentView
from promorang_client.normalizers.profile import ProfileUser


class OwnershipState(str, Enum):
    UNKNOWN = "unknown"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class Ownership:
    state: OwnershipState
    is_owner: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.state is OwnershipState.RESOLVED


UNKNOWN_OWNERSHIP = Ownership(OwnershipState.UNKNOWN)


def _id_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def resolve_ownership(
    resource_owner_id: Any,
    auth_user_id: Any,
    public_view: bool = False,
) -> Ownership:
    """Compare ids as strings once both are known.

    ``public_view`` forces a resolved non-owner result so private controls
    never show on a public profile page.
    """
    if public_view:
        return Ownership(OwnershipState.RESOLVED, is_owner=False)

    owner = _id_text(resource_owner_id)
    viewer = _id_text(auth_user_id)
    if not owner or not viewer:
        return UNKNOWN_OWNERSHIP
    return Ownership(OwnershipState.RESOLVED, is_owner=owner == viewer)


def resolve_profile_ownership(
    profile: ProfileUser | None,
    auth_user: ProfileUser | None,
    public_view: bool = False,
) -> Ownership:
    if public_view:
        return Ownership(OwnershipState.RESOLVED, is_owner=False)
    if profile is None or auth_user is None:
        return UNKNOWN_OWNERSHIP
    return resolve_ownership(profile.id, auth_user.id)


def resolve_content_ownership(
    content: ContentView | None,
    auth_user: ProfileUser | None,
) -> Ownership:
    if content is None or auth_user is None:
        return UNKNOWN_OWNERSHIP
    return resolve_ownership(content.creator_id, auth_user.id)
