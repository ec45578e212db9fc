"""
Team service for managing team operations.

Encapsulates all business logic related to:
- Team CRUD operations
- Coach and roster consistency
"""

from typing import Any, Dict, List, Optional

from league.dataclasses import Identity, TeamCandidate, is_id
from league.enums import Action, Role
from league.errors import Conflict, NotFound
from league.logger import get_logger, log_audit
from league.models import Team, User
from league.policy import AuthorizationPolicy
from league.repositories.game_repository import GameRepository
from league.repositories.team_repository import TeamRepository
from league.repositories.user_repository import UserRepository
from league.results import Failure, Ok, Result
from league.services.base import BaseService, service_operation
from league.validators import validate_team

logger = get_logger(__name__)


def _member(user: User) -> Dict[str, Any]:
    return {
        'id': user.id,
        'first_name': user.first_name,
        'last_name': user.last_name,
        'email': user.email,
        'role': user.role,
    }


def serialize_team(team: Team) -> Dict[str, Any]:
    return {
        'id': team.id,
        'name': team.name,
        'coach': _member(team.coach) if team.coach else None,
        'players': [_member(p) for p in sorted(team.players, key=lambda p: p.id)],
    }


class TeamService(BaseService):
    """Service for team-related operations.

    A team belongs to its coach: only the coach (or an admin) may edit or
    delete it.

    Args:
        policy: Authorization policy.
        enforce_member_roles: Require the coach to be a coach and players
            to be players.
    """

    def __init__(
        self,
        policy: Optional[AuthorizationPolicy] = None,
        enforce_member_roles: bool = True,
        team_repo: Optional[TeamRepository] = None,
        user_repo: Optional[UserRepository] = None,
        game_repo: Optional[GameRepository] = None
    ):
        super().__init__(policy)
        self.enforce_member_roles = enforce_member_roles
        self.team_repo = team_repo or TeamRepository()
        self.user_repo = user_repo or UserRepository()
        self.game_repo = game_repo or GameRepository()

    # ==================== READS ====================

    @service_operation
    def list_teams(self) -> Result[List[dict]]:
        return Ok([serialize_team(t) for t in self.team_repo.get_all()])

    @service_operation
    def get_team(self, team_id: int) -> Result[dict]:
        team = self.team_repo.get_with_players(team_id)
        if team is None:
            return Failure(NotFound('Team not found'))
        return Ok(serialize_team(team))

    @service_operation
    def get_teams_by_user(self, user_id: int) -> Result[List[dict]]:
        """Teams the user coaches or plays for."""
        if self.user_repo.get(user_id) is None:
            return Failure(NotFound('User not found'))
        teams = self.team_repo.get_by_foreign_key('user', user_id)
        return Ok([serialize_team(t) for t in teams])

    # ==================== WRITES ====================

    @service_operation
    def create_team(self, identity: Identity, payload: Optional[Dict[str, Any]]) -> Result[dict]:
        """Create a team. Coaches create teams they coach; admins any team."""
        candidate = TeamCandidate.from_payload(payload or {})

        owner = candidate.coach_id if is_id(candidate.coach_id) else None
        denied = self.authorize(
            identity, Action.CREATE, [owner], 'Coaches can only create teams they coach'
        )
        if denied:
            return denied

        validated = self._validate(candidate)
        if not validated.ok:
            return validated
        fields = validated.value

        with self.transaction():
            team = self.team_repo.create(
                name=fields.name,
                coach_id=fields.coach_id,
                players=self.user_repo.get_many(fields.player_ids),
            )
            logger.info(f"Created team: {team.name} (ID: {team.id})")
            log_audit('team_created', 'team', team.id, actor_id=identity.subject_id)
            return Ok(serialize_team(team))

    @service_operation
    def update_team(
        self,
        identity: Identity,
        team_id: int,
        payload: Optional[Dict[str, Any]]
    ) -> Result[dict]:
        """Edit name, coach or roster. Only keys present in ``payload`` change."""
        team = self.team_repo.get_with_players(team_id)
        if team is None:
            return Failure(NotFound('Team not found'))

        denied = self.authorize(
            identity, Action.UPDATE, [team.coach_id], 'Only the team coach can edit this team'
        )
        if denied:
            return denied

        candidate = TeamCandidate.from_model(team).merged(payload or {})
        validated = self._validate(candidate)
        if not validated.ok:
            return validated
        fields = validated.value

        with self.transaction():
            self.team_repo.update(
                team,
                name=fields.name,
                coach_id=fields.coach_id,
                players=self.user_repo.get_many(fields.player_ids),
            )
            logger.info(f"Updated team: {team.name}")
            log_audit('team_updated', 'team', team.id, actor_id=identity.subject_id)
            return Ok(serialize_team(team))

    @service_operation
    def delete_team(self, identity: Identity, team_id: int) -> Result[dict]:
        """Delete a team that has no games."""
        with self.transaction():
            team = self.team_repo.get_or_raise(team_id)

            denied = self.authorize(
                identity, Action.DELETE, [team.coach_id], 'Only the team coach can delete this team'
            )
            if denied:
                return denied

            games = self.game_repo.count_for_team(team_id)
            if games:
                return Failure(Conflict(f'Team is part of {games} game(s); delete them first'))

            self.team_repo.delete(team)
            logger.info(f"Deleted team ID {team_id}")
            log_audit('team_deleted', 'team', team_id, actor_id=identity.subject_id)
            return Ok({'id': team_id, 'message': 'Team deleted successfully'})

    def _validate(self, candidate: TeamCandidate) -> Result[TeamCandidate]:
        users = self.user_repo.get_many(candidate.referenced_user_ids())
        members = {u.id: Role(u.role) for u in users}
        return validate_team(candidate, members, enforce_roles=self.enforce_member_roles)
