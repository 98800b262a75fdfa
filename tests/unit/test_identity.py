"""Unit tests for ownership resolution."""

from __future__ import annotations

import pytest

from promorang_client.identity import (
    UNKNOWN_OWNERSHIP,
    Ownership,
    OwnershipState,
    resolve_content_ownership,
    resolve_ownership,
    resolve_profile_ownership,
)
from promorang_client.normalizers.content import normalize_content
from promorang_client.normalizers.profile import adapt_session_user


class TestResolveOwnership:
    def test_same_id_across_types(self):
        result = resolve_ownership(42, "42")
        assert result == Ownership(OwnershipState.RESOLVED, is_owner=True)
        assert result.is_resolved

    def test_different_ids(self):
        assert resolve_ownership("u-1", "u-2") == Ownership(OwnershipState.RESOLVED, is_owner=False)

    @pytest.mark.parametrize("owner, viewer", [(None, "u-1"), ("u-1", None), ("", "u-1"), ("  ", "x")])
    def test_unknown_until_both_known(self, owner, viewer):
        result = resolve_ownership(owner, viewer)
        assert result is UNKNOWN_OWNERSHIP
        assert not result.is_resolved
        assert not result.is_owner

    def test_public_view_never_owns(self):
        assert resolve_ownership("u-1", "u-1", public_view=True).is_owner is False
        assert resolve_ownership(None, None, public_view=True).is_resolved


class TestProfileOwnership:
    def test_own_profile(self):
        me = adapt_session_user({"id": "u-1", "username": "ada"})
        assert resolve_profile_ownership(me, me).is_owner

    def test_username_is_not_compared(self):
        viewed = adapt_session_user({"id": "u-2", "username": "ada"})
        me = adapt_session_user({"id": "u-1", "username": "ada"})
        assert not resolve_profile_ownership(viewed, me).is_owner

    def test_unknown_without_auth_user(self):
        viewed = adapt_session_user({"id": "u-2"})
        assert resolve_profile_ownership(viewed, None) is UNKNOWN_OWNERSHIP

    def test_public_view(self):
        me = adapt_session_user({"id": "u-1"})
        result = resolve_profile_ownership(me, me, public_view=True)
        assert result.is_resolved
        assert not result.is_owner


class TestContentOwnership:
    def test_creator_owns_content(self):
        content = normalize_content({"id": 1, "creator_id": 55}, 1)
        me = adapt_session_user({"id": "55"})
        assert resolve_content_ownership(content, me).is_owner

    def test_other_user(self):
        content = normalize_content({"id": 1, "creator_id": 55}, 1)
        me = adapt_session_user({"id": "56"})
        result = resolve_content_ownership(content, me)
        assert result.is_resolved
        assert not result.is_owner

    def test_unknown_while_loading(self):
        assert resolve_content_ownership(None, adapt_session_user({"id": "1"})) is UNKNOWN_OWNERSHIP
