"""
API routes package for the league application.

Contains all API endpoints organized by entity.
"""

# Import submodules to register routes
from league.routes.api import users, teams, games

__all__ = ['users', 'teams', 'games']
