"""
User service for managing user operations.

Encapsulates all business logic related to:
- Registration and admin creation
- Self and admin edits, including role changes
- Account deletion
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

from league.auth import BcryptHasher
from league.dataclasses import Identity, UserCandidate
from league.enums import Action, Role
from league.errors import Conflict, Forbidden, NotFound
from league.logger import get_logger, log_audit
from league.models import User
from league.policy import AuthorizationPolicy
from league.repositories.team_repository import TeamRepository
from league.repositories.user_repository import UserRepository
from league.results import Failure, Ok, Result
from league.services.base import BaseService, service_operation
from league.validators import validate_user

logger = get_logger(__name__)


def serialize_user(user: User) -> Dict[str, Any]:
    """Public view of a user. The password hash is never included."""
    return {
        'id': user.id,
        'first_name': user.first_name,
        'last_name': user.last_name,
        'email': user.email,
        'phone_number': user.phone_number,
        'role': user.role,
        'created_at': user.created_at.isoformat() if user.created_at else None,
    }


class UserService(BaseService):
    """Service for user-related operations.

    Args:
        hasher: Password hasher.
        policy: Authorization policy.
        user_repo: UserRepository instance (defaults to new instance).
        team_repo: TeamRepository instance (defaults to new instance).
    """

    def __init__(
        self,
        hasher: BcryptHasher,
        policy: Optional[AuthorizationPolicy] = None,
        user_repo: Optional[UserRepository] = None,
        team_repo: Optional[TeamRepository] = None
    ):
        super().__init__(policy)
        self.hasher = hasher
        self.user_repo = user_repo or UserRepository()
        self.team_repo = team_repo or TeamRepository()

    # ==================== READS ====================

    @service_operation
    def list_users(self) -> Result[List[dict]]:
        return Ok([serialize_user(u) for u in self.user_repo.get_all()])

    @service_operation
    def get_user(self, user_id: int) -> Result[dict]:
        user = self.user_repo.get(user_id)
        if user is None:
            return Failure(NotFound('User not found'))
        return Ok(serialize_user(user))

    @service_operation
    def get_users_by_team(self, team_id: int) -> Result[List[dict]]:
        """Coach and players of a team."""
        if self.team_repo.get(team_id) is None:
            return Failure(NotFound('Team not found'))
        users = self.user_repo.get_by_foreign_key('team', team_id)
        return Ok([serialize_user(u) for u in users])

    # ==================== WRITES ====================

    @service_operation
    def register(self, payload: Optional[Dict[str, Any]]) -> Result[dict]:
        """Public self-registration as a player or coach.

        Returns:
            Ok with the new user, or Failure(ValidationFailed | Forbidden | Conflict).
        """
        candidate = self._with_default_role(UserCandidate.from_payload(payload or {}))
        if Role.from_string(candidate.role) == Role.ADMIN:
            return Failure(Forbidden('Administrators cannot self-register'))
        return self._create(candidate, actor_id=None)

    @service_operation
    def create_user(self, identity: Identity, payload: Optional[Dict[str, Any]]) -> Result[dict]:
        """Administrative creation of a user with any role."""
        denied = self.authorize(
            identity, Action.CREATE, [None], 'Only administrators can create users'
        )
        if denied:
            return denied
        candidate = self._with_default_role(UserCandidate.from_payload(payload or {}))
        return self._create(candidate, actor_id=identity.subject_id)

    @service_operation
    def bootstrap_admin(self, payload: Dict[str, Any]) -> Result[dict]:
        """Create an administrator without an acting identity (CLI only)."""
        candidate = replace(UserCandidate.from_payload(payload), role=Role.ADMIN.value)
        return self._create(candidate, actor_id=None)

    @service_operation
    def update_user(
        self,
        identity: Identity,
        user_id: int,
        payload: Optional[Dict[str, Any]]
    ) -> Result[dict]:
        """Edit a user. Users edit themselves; only admins change roles.

        Only the keys present in ``payload`` change. A new password is
        re-hashed.
        """
        denied = self.authorize(
            identity, Action.UPDATE, [user_id], 'Unauthorized to edit this account'
        )
        if denied:
            return denied

        user = self.user_repo.get(user_id)
        if user is None:
            return Failure(NotFound('User not found'))

        data = payload or {}
        requested_role = Role.from_string(data.get('role'))
        # Unknown roles fall through to validation
        if (requested_role is not None and requested_role != Role(user.role)
                and not identity.is_admin):
            return Failure(Forbidden('Only administrators can change roles'))

        candidate = UserCandidate.from_model(user).merged(data)
        validated = validate_user(candidate, require_password=False)
        if not validated.ok:
            return validated
        fields = validated.value

        if fields.email != user.email:
            existing = self.user_repo.find_by_email(fields.email)
            if existing and existing.id != user.id:
                return Failure(Conflict('A user with this email already exists'))

        changes = {
            'first_name': fields.first_name,
            'last_name': fields.last_name,
            'email': fields.email,
            'phone_number': fields.phone_number,
            'role': fields.role.value,
        }
        if fields.password is not None:
            changes['password_hash'] = self.hasher.hash(fields.password)

        with self.transaction():
            self.user_repo.update(user, **changes)
            logger.info(f"Updated user ID {user.id}")
            log_audit('user_updated', 'user', user.id, actor_id=identity.subject_id,
                      details={'fields': sorted(k for k in data if k != 'password')})
            return Ok(serialize_user(user))

    @service_operation
    def delete_user(self, identity: Identity, user_id: int) -> Result[dict]:
        """Delete an account. Users delete themselves; admins anyone.

        A user who still coaches a team cannot be deleted.
        """
        denied = self.authorize(
            identity, Action.DELETE, [user_id], 'Unauthorized to delete this account'
        )
        if denied:
            return denied

        user = self.user_repo.get(user_id)
        if user is None:
            return Failure(NotFound('User not found'))

        coached = self.user_repo.count_coached_teams(user_id)
        if coached:
            return Failure(Conflict(
                f'User coaches {coached} team(s); reassign or delete them first'
            ))

        with self.transaction():
            self.user_repo.delete(user)
            logger.info(f"Deleted user ID {user_id}")
            log_audit('user_deleted', 'user', user_id, actor_id=identity.subject_id)
            return Ok({'id': user_id, 'message': 'User deleted successfully'})

    # ==================== HELPERS ====================

    @staticmethod
    def _with_default_role(candidate: UserCandidate) -> UserCandidate:
        if candidate.role is None:
            return replace(candidate, role=Role.PLAYER.value)
        return candidate

    def _create(self, candidate: UserCandidate, actor_id: Optional[int]) -> Result[dict]:
        validated = validate_user(candidate)
        if not validated.ok:
            return validated
        fields = validated.value

        if self.user_repo.find_by_email(fields.email):
            return Failure(Conflict('A user with this email already exists'))

        with self.transaction():
            user = self.user_repo.create(
                first_name=fields.first_name,
                last_name=fields.last_name,
                email=fields.email,
                phone_number=fields.phone_number,
                password_hash=self.hasher.hash(fields.password),
                role=fields.role.value,
            )
            logger.info(f"Created user ID {user.id}")
            log_audit('user_created', 'user', user.id, actor_id=actor_id,
                      details={'role': user.role})
            return Ok(serialize_user(user))
