"""
Game API endpoints.

All endpoints require a bearer token. Handlers only marshal: all rules
live in GameService.
"""

from flask import g

from league.routes import api_bp
from league.services import get_services
from league.utils import get_json_body, login_required, respond


@api_bp.route('/games', methods=['GET'])
@login_required
def list_games():
    """Get all games."""
    return respond(get_services().games.list_games(), key='games')


@api_bp.route('/games/<int:game_id>', methods=['GET'])
@login_required
def get_game(game_id: int):
    """Get a game by ID."""
    return respond(get_services().games.get_game(game_id), key='game')


@api_bp.route('/games/team/<int:team_id>', methods=['GET'])
@login_required
def get_games_by_team(team_id: int):
    """Get the games of a team."""
    return respond(get_services().games.get_games_by_team(team_id), key='games')


@api_bp.route('/games/user/<int:user_id>', methods=['GET'])
@login_required
def get_games_by_user(user_id: int):
    """Get the games of every team a user belongs to."""
    return respond(get_services().games.get_games_by_user(user_id), key='games')


@api_bp.route('/games', methods=['POST'])
@login_required
def create_game():
    """Schedule a game between two teams."""
    data, error = get_json_body()
    if error:
        return error
    return respond(get_services().games.create_game(g.identity, data), 201, key='game')


@api_bp.route('/games/edit/<int:game_id>', methods=['PUT'])
@login_required
def update_game(game_id: int):
    """Edit a game or record its result."""
    data, error = get_json_body()
    if error:
        return error
    return respond(get_services().games.update_game(g.identity, game_id, data), key='game')


@api_bp.route('/games/<int:game_id>', methods=['DELETE'])
@login_required
def delete_game(game_id: int):
    """Delete a game."""
    return respond(get_services().games.delete_game(g.identity, game_id))
