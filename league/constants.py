"""
Centralized constants for the league application.

Field limits and patterns shared by the validators and the models.
"""

import re
from typing import Final, Pattern

# ==================== USERS ====================
MAX_NAME_LENGTH: Final[int] = 100
MAX_EMAIL_LENGTH: Final[int] = 254
MAX_PHONE_LENGTH: Final[int] = 32
PASSWORD_MIN_LENGTH: Final[int] = 8
# bcrypt only accepts secrets up to 72 bytes
PASSWORD_MAX_BYTES: Final[int] = 72

EMAIL_PATTERN: Final[Pattern[str]] = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
PHONE_PATTERN: Final[Pattern[str]] = re.compile(r'^\+?[\d\s\-()]{6,}$')

# ==================== TEAMS ====================
MAX_TEAM_NAME_LENGTH: Final[int] = 100

# ==================== GAMES ====================
TEAMS_PER_GAME: Final[int] = 2
MAX_RESULT_LENGTH: Final[int] = 100
