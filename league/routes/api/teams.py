"""
Team API endpoints.

All endpoints require a bearer token. Handlers only marshal: all rules
live in TeamService.
"""

from flask import g

from league.routes import api_bp
from league.services import get_services
from league.utils import get_json_body, login_required, respond


@api_bp.route('/teams', methods=['GET'])
@login_required
def list_teams():
    """Get all teams."""
    return respond(get_services().teams.list_teams(), key='teams')


@api_bp.route('/teams/<int:team_id>', methods=['GET'])
@login_required
def get_team(team_id: int):
    """Get a team with its coach and players."""
    return respond(get_services().teams.get_team(team_id), key='team')


@api_bp.route('/teams/user/<int:user_id>', methods=['GET'])
@login_required
def get_teams_by_user(user_id: int):
    """Get the teams a user coaches or plays for."""
    return respond(get_services().teams.get_teams_by_user(user_id), key='teams')


@api_bp.route('/teams', methods=['POST'])
@login_required
def create_team():
    """Create a team."""
    data, error = get_json_body()
    if error:
        return error
    return respond(get_services().teams.create_team(g.identity, data), 201, key='team')


@api_bp.route('/teams/edit/<int:team_id>', methods=['PUT'])
@login_required
def update_team(team_id: int):
    """Edit a team."""
    data, error = get_json_body()
    if error:
        return error
    return respond(get_services().teams.update_team(g.identity, team_id, data), key='team')


@api_bp.route('/teams/<int:team_id>', methods=['DELETE'])
@login_required
def delete_team(team_id: int):
    """Delete a team."""
    return respond(get_services().teams.delete_team(g.identity, team_id))
