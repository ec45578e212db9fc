"""
Game repository for game data access.

Provides specialized queries for game entities.
"""

from typing import List

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from league import db
from league.models import Game, Team, User, game_teams
from league.repositories.base import BaseRepository


class GameRepository(BaseRepository[Game]):
    """Repository for game data access operations."""

    foreign_keys = ('team', 'user')

    def __init__(self):
        super().__init__(Game)

    def get_by_team(self, team_id: int) -> List[Game]:
        """Get all games a team takes part in.

        Args:
            team_id: ID of the team.

        Returns:
            List of Game instances ordered by date.
        """
        return db.session.execute(
            select(Game)
            .options(selectinload(Game.teams))
            .where(Game.teams.any(Team.id == team_id))
            .order_by(Game.date, Game.id)
        ).scalars().all()

    def get_by_user(self, user_id: int) -> List[Game]:
        """Get games involving any team the user coaches or plays for.

        Args:
            user_id: ID of the user.

        Returns:
            List of Game instances ordered by date.
        """
        involved = or_(
            Team.coach_id == user_id,
            Team.players.any(User.id == user_id),
        )
        return db.session.execute(
            select(Game)
            .options(selectinload(Game.teams))
            .where(Game.teams.any(involved))
            .order_by(Game.date, Game.id)
        ).scalars().all()

    def count_for_team(self, team_id: int) -> int:
        """Count games a team is scheduled in or has played."""
        return db.session.execute(
            select(func.count(game_teams.c.game_id)).where(game_teams.c.team_id == team_id)
        ).scalar_one()
