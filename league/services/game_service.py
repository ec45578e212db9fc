"""
Game service for managing game operations.

Encapsulates all business logic related to:
- Scheduling games between exactly two teams
- Recording results (scheduled -> completed)
- Game lookups by team and by user
"""

from typing import Any, Dict, Iterable, List, Optional

from league.dataclasses import GameCandidate, Identity
from league.enums import Action
from league.errors import NotFound, ValidationFailed
from league.logger import get_logger, log_audit
from league.models import Game, Team
from league.policy import AuthorizationPolicy
from league.repositories.game_repository import GameRepository
from league.repositories.team_repository import TeamRepository
from league.repositories.user_repository import UserRepository
from league.results import Failure, Ok, Result
from league.services.base import BaseService, service_operation
from league.validators import validate_game

logger = get_logger(__name__)


def serialize_game(game: Game) -> Dict[str, Any]:
    return {
        'id': game.id,
        'date': game.date.isoformat() if game.date else None,
        'result': game.result,
        'status': game.status.value,
        'teams': [
            {'id': t.id, 'name': t.name, 'coach_id': t.coach_id} for t in game.teams
        ],
    }


def _coaches(teams: Iterable[Team]) -> List[int]:
    return [t.coach_id for t in teams]


def _clears_result(data: Dict[str, Any]) -> bool:
    if 'result' not in data:
        return False
    value = data['result']
    return value is None or (isinstance(value, str) and not value.strip())


class GameService(BaseService):
    """Service for game-related operations.

    A game is co-owned by the coaches of its two teams; either of them (or
    an admin) may schedule, edit or delete it.

    Args:
        policy: Authorization policy.
        allow_result_reset: Permit clearing the result of a completed game.
    """

    def __init__(
        self,
        policy: Optional[AuthorizationPolicy] = None,
        allow_result_reset: bool = False,
        game_repo: Optional[GameRepository] = None,
        team_repo: Optional[TeamRepository] = None,
        user_repo: Optional[UserRepository] = None
    ):
        super().__init__(policy)
        self.allow_result_reset = allow_result_reset
        self.game_repo = game_repo or GameRepository()
        self.team_repo = team_repo or TeamRepository()
        self.user_repo = user_repo or UserRepository()

    # ==================== READS ====================

    @service_operation
    def list_games(self) -> Result[List[dict]]:
        return Ok([serialize_game(g) for g in self.game_repo.get_all()])

    @service_operation
    def get_game(self, game_id: int) -> Result[dict]:
        game = self.game_repo.get(game_id)
        if game is None:
            return Failure(NotFound('Game not found'))
        return Ok(serialize_game(game))

    @service_operation
    def get_games_by_team(self, team_id: int) -> Result[List[dict]]:
        if self.team_repo.get(team_id) is None:
            return Failure(NotFound('Team not found'))
        games = self.game_repo.get_by_foreign_key('team', team_id)
        return Ok([serialize_game(g) for g in games])

    @service_operation
    def get_games_by_user(self, user_id: int) -> Result[List[dict]]:
        """Games of every team the user coaches or plays for."""
        if self.user_repo.get(user_id) is None:
            return Failure(NotFound('User not found'))
        games = self.game_repo.get_by_foreign_key('user', user_id)
        return Ok([serialize_game(g) for g in games])

    # ==================== WRITES ====================

    @service_operation
    def create_game(self, identity: Identity, payload: Optional[Dict[str, Any]]) -> Result[dict]:
        """Schedule a game.

        The owners of a new game are the coaches of the teams in the
        payload, so the payload is validated before the policy is asked.
        """
        candidate = GameCandidate.from_payload(payload or {})
        teams = self.team_repo.get_many(candidate.referenced_team_ids())

        validated = validate_game(candidate, known_team_ids={t.id for t in teams})
        if not validated.ok:
            return validated
        fields = validated.value

        denied = self.authorize(
            identity, Action.CREATE, _coaches(teams),
            'Only a coach of one of the teams can schedule this game'
        )
        if denied:
            return denied

        with self.transaction():
            game = self.game_repo.create(
                date=fields.date,
                result=fields.result,
                teams=sorted(teams, key=lambda t: t.id),
            )
            logger.info(f"Created game ID {game.id} on {game.date}")
            log_audit('game_created', 'game', game.id, actor_id=identity.subject_id,
                      details={'team_ids': fields.team_ids})
            return Ok(serialize_game(game))

    @service_operation
    def update_game(
        self,
        identity: Identity,
        game_id: int,
        payload: Optional[Dict[str, Any]]
    ) -> Result[dict]:
        """Edit date, teams or result. Only keys present in ``payload`` change.

        A recorded result cannot be cleared unless ``allow_result_reset``.
        Moving a game to other teams also requires rights over the new teams.
        """
        game = self.game_repo.get(game_id)
        if game is None:
            return Failure(NotFound('Game not found'))

        denied = self.authorize(
            identity, Action.UPDATE, _coaches(game.teams),
            'Only a coach of one of the teams can edit this game'
        )
        if denied:
            return denied

        data = payload or {}
        if game.result and _clears_result(data) and not self.allow_result_reset:
            return Failure(ValidationFailed.single(
                'result', 'cannot be cleared once the game is completed'
            ))

        candidate = GameCandidate.from_model(game).merged(data)
        teams = self.team_repo.get_many(candidate.referenced_team_ids())

        validated = validate_game(candidate, known_team_ids={t.id for t in teams})
        if not validated.ok:
            return validated
        fields = validated.value

        if set(fields.team_ids) != {t.id for t in game.teams}:
            denied = self.authorize(
                identity, Action.UPDATE, _coaches(teams),
                'Only a coach of one of the new teams can move this game'
            )
            if denied:
                return denied

        with self.transaction():
            self.game_repo.update(
                game,
                date=fields.date,
                result=fields.result,
                teams=sorted(teams, key=lambda t: t.id),
            )
            logger.info(f"Updated game ID {game.id} ({game.status.value})")
            log_audit('game_updated', 'game', game.id, actor_id=identity.subject_id,
                      details={'status': game.status.value})
            return Ok(serialize_game(game))

    @service_operation
    def delete_game(self, identity: Identity, game_id: int) -> Result[dict]:
        with self.transaction():
            game = self.game_repo.get_or_raise(game_id)

            denied = self.authorize(
                identity, Action.DELETE, _coaches(game.teams),
                'Only a coach of one of the teams can delete this game'
            )
            if denied:
                return denied

            self.game_repo.delete(game)
            logger.info(f"Deleted game ID {game_id}")
            log_audit('game_deleted', 'game', game_id, actor_id=identity.subject_id)
            return Ok({'id': game_id, 'message': 'Game deleted successfully'})
