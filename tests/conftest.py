"""
Pytest fixtures for league application tests.

Provides fixtures for app, client, services, seeded users and teams, and
bearer headers.
"""

from datetime import datetime, timedelta, timezone

import pytest

from league import create_app, db
from league.dataclasses import Identity
from league.enums import Role
from league.models import Team, User
from league.services import get_services

PASSWORD = 'correct-horse-battery'


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now=None):
        self.current = now or datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

    def now(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


@pytest.fixture
def app():
    """Create application for testing with fresh database."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client for making requests."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def services(app):
    """Services bound to the test app."""
    return get_services()


@pytest.fixture
def clock():
    return FrozenClock()


def _make_user(services, first_name, email, role):
    payload = {
        'first_name': first_name,
        'last_name': 'Tester',
        'email': email,
        'password': PASSWORD,
        'role': role,
    }
    if role == 'admin':
        result = services.users.bootstrap_admin(payload)
    else:
        result = services.users.register(payload)
    assert result.ok, result
    return result.value


@pytest.fixture
def player(services):
    """A registered player."""
    return _make_user(services, 'Pat', 'pat@example.com', 'player')


@pytest.fixture
def other_player(services):
    return _make_user(services, 'Quinn', 'quinn@example.com', 'player')


@pytest.fixture
def coach(services):
    """A registered coach."""
    return _make_user(services, 'Casey', 'casey@example.com', 'coach')


@pytest.fixture
def other_coach(services):
    return _make_user(services, 'Drew', 'drew@example.com', 'coach')


@pytest.fixture
def admin(services):
    """An administrator created the way the CLI does it."""
    return _make_user(services, 'Ada', 'ada@example.com', 'admin')


@pytest.fixture
def teams(app, coach, other_coach, player, other_player):
    """Two teams, each with its own coach and one player."""
    home = Team(name='Home United', coach_id=coach['id'],
                players=[db.session.get(User, player['id'])])
    away = Team(name='Away Rovers', coach_id=other_coach['id'],
                players=[db.session.get(User, other_player['id'])])
    db.session.add_all([home, away])
    db.session.commit()

    return [home.id, away.id]


@pytest.fixture
def identity_for():
    """Build the Identity of a serialized user."""
    def _identity(user):
        return Identity(subject_id=user['id'], role=Role(user['role']))
    return _identity


@pytest.fixture
def password():
    """Password every seeded user registers with."""
    return PASSWORD


@pytest.fixture
def auth_header(services):
    """Build a bearer header for a serialized user."""
    def _header(user):
        token = services.auth.codec.issue(user['id']).token
        return {'Authorization': f'Bearer {token}'}
    return _header
