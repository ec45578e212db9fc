"""
User API endpoints.

Registration and login are public; everything else requires a bearer token.
Handlers only marshal: all rules live in UserService and AuthService.
"""

from flask import current_app, g

from league.extensions import limiter
from league.routes import api_bp
from league.services import get_services
from league.utils import get_json_body, login_required, respond


@api_bp.route('/users', methods=['GET'])
@login_required
def list_users():
    """Get all users."""
    return respond(get_services().users.list_users(), key='users')


@api_bp.route('/users/<int:user_id>', methods=['GET'])
@login_required
def get_user(user_id: int):
    """Get a user by ID."""
    return respond(get_services().users.get_user(user_id), key='user')


@api_bp.route('/users/team/<int:team_id>', methods=['GET'])
@login_required
def get_users_by_team(team_id: int):
    """Get the coach and players of a team."""
    return respond(get_services().users.get_users_by_team(team_id), key='users')


@api_bp.route('/users', methods=['POST'])
@login_required
def create_user():
    """Create a user with any role (admin only)."""
    data, error = get_json_body()
    if error:
        return error
    result = get_services().users.create_user(g.identity, data)
    return respond(result, 201, key='user')


@api_bp.route('/users/register', methods=['POST'])
def register():
    """Self-register as a player or coach."""
    data, error = get_json_body()
    if error:
        return error
    return respond(get_services().users.register(data), 201, key='user')


@api_bp.route('/users/login', methods=['POST'])
@limiter.limit(lambda: current_app.config['LOGIN_RATE_LIMIT'])
def login():
    """Exchange email and password for a bearer token."""
    data, error = get_json_body()
    if error:
        return error
    result = get_services().auth.authenticate(data.get('email'), data.get('password'))
    return respond(result, message='Authentication successful')


@api_bp.route('/users/edit/<int:user_id>', methods=['PUT'])
@login_required
def update_user(user_id: int):
    """Edit a user."""
    data, error = get_json_body()
    if error:
        return error
    result = get_services().users.update_user(g.identity, user_id, data)
    return respond(result, key='user')


@api_bp.route('/users/<int:user_id>', methods=['DELETE'])
@login_required
def delete_user(user_id: int):
    """Delete an account; users may only delete their own."""
    return respond(get_services().users.delete_user(g.identity, user_id))
