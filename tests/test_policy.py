"""
Tests for the authorization policy.

The policy is a pure function, so it is tested table-driven without a
database.
"""

import pytest

from league.dataclasses import Identity
from league.enums import Action, Role
from league.policy import AuthorizationPolicy

PLAYER = Identity(subject_id=1, role=Role.PLAYER)
COACH = Identity(subject_id=2, role=Role.COACH)
ADMIN = Identity(subject_id=3, role=Role.ADMIN)


@pytest.mark.parametrize('identity, action, owner_id, expected', [
    # Owners may always act on their own resources
    (PLAYER, Action.DELETE, 1, True),
    (PLAYER, Action.UPDATE, 1, True),
    (COACH, Action.CREATE, 2, True),
    (ADMIN, Action.DELETE, 3, True),
    # Anyone else is denied...
    (PLAYER, Action.DELETE, 2, False),
    (PLAYER, Action.UPDATE, 3, False),
    (COACH, Action.DELETE, 1, False),
    (COACH, Action.CREATE, None, False),
    # ...unless an admin uses a designated action
    (ADMIN, Action.DELETE, 1, True),
    (ADMIN, Action.UPDATE, 2, True),
    (ADMIN, Action.CREATE, None, True),
])
def test_default_policy(identity, action, owner_id, expected):
    assert AuthorizationPolicy().can_perform(identity, action, owner_id) is expected


@pytest.mark.parametrize('subject_id', [1, 17, 10_000])
@pytest.mark.parametrize('role', [Role.PLAYER, Role.COACH, Role.ADMIN])
def test_self_delete_always_allowed(subject_id, role):
    identity = Identity(subject_id=subject_id, role=role)
    assert AuthorizationPolicy(admin_actions=()).can_perform(identity, Action.DELETE, subject_id)


def test_admin_override_can_be_disabled():
    policy = AuthorizationPolicy(admin_actions=())
    assert not policy.can_perform(ADMIN, Action.DELETE, 1)
    assert policy.can_perform(ADMIN, Action.DELETE, ADMIN.subject_id)


def test_admin_override_limited_to_configured_actions():
    policy = AuthorizationPolicy(admin_actions=['delete'])
    assert policy.can_perform(ADMIN, Action.DELETE, 1)
    assert not policy.can_perform(ADMIN, Action.UPDATE, 1)


class TestCanPerformAny:
    """Co-owned resources such as games."""

    def test_any_owner_matches(self):
        policy = AuthorizationPolicy()
        assert policy.can_perform_any(COACH, Action.UPDATE, [9, 2])

    def test_no_owner_matches(self):
        policy = AuthorizationPolicy()
        assert not policy.can_perform_any(COACH, Action.UPDATE, [9, 10])

    def test_no_owners_falls_back_to_admin_rule(self):
        policy = AuthorizationPolicy()
        assert policy.can_perform_any(ADMIN, Action.CREATE, [])
        assert not policy.can_perform_any(COACH, Action.CREATE, [])
