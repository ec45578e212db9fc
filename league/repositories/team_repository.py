"""
Team repository for team data access.

Provides specialized queries for team entities.
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from league import db
from league.models import Team, User
from league.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for team data access operations."""

    foreign_keys = ('user',)

    def __init__(self):
        super().__init__(Team)

    def get_with_players(self, team_id: int) -> Optional[Team]:
        """Get a team with eager-loaded coach and players.

        Args:
            team_id: ID of the team.

        Returns:
            Team instance with players loaded, or None.
        """
        return db.session.execute(
            select(Team)
            .options(selectinload(Team.players), selectinload(Team.coach))
            .where(Team.id == team_id)
        ).scalars().first()

    def get_by_user(self, user_id: int) -> List[Team]:
        """Get teams a user coaches or plays for.

        Args:
            user_id: ID of the user.

        Returns:
            List of Team instances ordered by ID.
        """
        return db.session.execute(
            select(Team)
            .options(selectinload(Team.players))
            .where(or_(
                Team.coach_id == user_id,
                Team.players.any(User.id == user_id),
            ))
            .order_by(Team.id)
        ).scalars().all()
