"""
User repository for user data access.

Provides specialized queries for user entities.
"""

from typing import List, Optional

from sqlalchemy import func, select

from league import db
from league.models import Team, User
from league.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user data access operations."""

    foreign_keys = ('team',)

    def __init__(self):
        super().__init__(User)

    def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, case-insensitively.

        Args:
            email: Email address.

        Returns:
            User instance or None.
        """
        return db.session.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        ).scalars().first()

    def get_by_team(self, team_id: int) -> List[User]:
        """Get the coach and players of a team.

        Args:
            team_id: ID of the team.

        Returns:
            Coach first, then players ordered by ID; empty if no such team.
        """
        team = db.session.get(Team, team_id)
        if team is None:
            return []
        return [team.coach] + sorted(team.players, key=lambda p: p.id)

    def count_coached_teams(self, user_id: int) -> int:
        """Count teams that name this user as coach."""
        return db.session.execute(
            select(func.count(Team.id)).where(Team.coach_id == user_id)
        ).scalar_one()
