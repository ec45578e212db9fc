"""
Service layer for business logic.

This module provides service classes that encapsulate business logic,
separating it from HTTP handling in routes and data access in repositories.
Services are built once per application from its config and kept in
``app.extensions``, so each app carries its own signing secret and policy.
"""

from dataclasses import dataclass

from flask import Flask, current_app

from league.auth import BcryptHasher
from league.policy import AuthorizationPolicy
from league.services.auth_service import AuthService
from league.services.base import BaseService, service_operation
from league.services.game_service import GameService
from league.services.team_service import TeamService
from league.services.user_service import UserService
from league.tokens import TokenCodec

EXTENSION_KEY = 'league_services'


@dataclass
class Services:
    auth: AuthService
    users: UserService
    teams: TeamService
    games: GameService


def init_services(app: Flask) -> Services:
    """Build the services for ``app`` from its config."""
    codec = TokenCodec.from_config(app.config)
    hasher = BcryptHasher(rounds=app.config['BCRYPT_ROUNDS'])
    policy = AuthorizationPolicy(app.config['ADMIN_OVERRIDE_ACTIONS'])

    services = Services(
        auth=AuthService(codec, hasher),
        users=UserService(hasher, policy),
        teams=TeamService(policy, enforce_member_roles=app.config['TEAM_ENFORCE_MEMBER_ROLES']),
        games=GameService(policy, allow_result_reset=app.config['GAME_ALLOW_RESULT_RESET']),
    )
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services() -> Services:
    """Services of the current application."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    'BaseService',
    'service_operation',
    'Services',
    'AuthService',
    'UserService',
    'TeamService',
    'GameService',
    'init_services',
    'get_services',
]
