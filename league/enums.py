"""
Enums for the league application.

Provides type-safe constants for user roles, guarded actions and game status.
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Roles a user can hold."""
    PLAYER = "player"
    COACH = "coach"
    ADMIN = "admin"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["Role"]:
        """Convert string to Role, or None when it names no role."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower().strip())
        except ValueError:
            return None


class Action(str, Enum):
    """Mutating actions checked by the authorization policy."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class GameStatus(str, Enum):
    """Game lifecycle. Only moves forward: scheduled -> completed."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
