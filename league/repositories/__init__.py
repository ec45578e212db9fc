"""
Repository layer for data access.

This module provides repository classes that abstract database operations,
providing a clean interface for data access separate from business logic.
"""

from league.repositories.base import (
    BaseRepository,
    ConstraintViolation,
    RecordNotFound,
    RepositoryError,
)
from league.repositories.game_repository import GameRepository
from league.repositories.team_repository import TeamRepository
from league.repositories.user_repository import UserRepository

__all__ = [
    'BaseRepository',
    'RepositoryError',
    'RecordNotFound',
    'ConstraintViolation',
    'UserRepository',
    'TeamRepository',
    'GameRepository',
]
