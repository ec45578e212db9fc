"""
Authorization policy.

A pure decision over (identity, action, resource owner). The caller is
responsible for having authenticated the identity first; an unauthenticated
request never reaches this module.
"""

from typing import Iterable, Optional

from league.dataclasses import Identity
from league.enums import Action, Role

DEFAULT_ADMIN_ACTIONS = frozenset({Action.CREATE, Action.UPDATE, Action.DELETE})


class AuthorizationPolicy:
    """Ownership rules with an optional administrator override.

    Args:
        admin_actions: Actions an admin may perform on resources they do
            not own. An empty collection disables the override.
    """

    def __init__(self, admin_actions: Iterable = DEFAULT_ADMIN_ACTIONS):
        self.admin_actions = frozenset(Action(a) for a in admin_actions)

    def can_perform(
        self,
        identity: Identity,
        action: Action,
        owner_id: Optional[int]
    ) -> bool:
        if owner_id is not None and owner_id == identity.subject_id:
            return True
        if identity.role == Role.ADMIN and action in self.admin_actions:
            return True
        return False

    def can_perform_any(
        self,
        identity: Identity,
        action: Action,
        owner_ids: Iterable[Optional[int]]
    ) -> bool:
        """Allow when any of several co-owners would be allowed (games)."""
        owners = list(owner_ids) or [None]
        return any(self.can_perform(identity, action, owner) for owner in owners)
