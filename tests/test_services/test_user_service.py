"""
Tests for the UserService.

Tests registration, edits, role changes and account deletion.
"""

import pytest

from league.errors import Conflict, Forbidden, NotFound, ValidationFailed


def _payload(**overrides):
    data = {
        'first_name': 'Robin',
        'last_name': 'New',
        'email': 'robin@example.com',
        'password': 'a-long-password',
    }
    data.update(overrides)
    return data


class TestRegister:
    """Test suite for public registration."""

    def test_defaults_to_player(self, services):
        result = services.users.register(_payload())

        assert result.ok
        assert result.value['role'] == 'player'
        assert result.value['email'] == 'robin@example.com'
        assert 'password' not in result.value
        assert 'password_hash' not in result.value

    def test_register_as_coach(self, services):
        assert services.users.register(_payload(role='coach')).value['role'] == 'coach'

    def test_cannot_register_as_admin(self, services):
        result = services.users.register(_payload(role='admin'))
        assert isinstance(result.error, Forbidden)

    def test_duplicate_email_is_conflict(self, services, player):
        result = services.users.register(_payload(email='PAT@example.com'))
        assert isinstance(result.error, Conflict)

    def test_invalid_payload(self, services):
        result = services.users.register({'email': 'nope'})
        assert isinstance(result.error, ValidationFailed)
        assert {v.field for v in result.error.violations} == {
            'first_name', 'last_name', 'email', 'password'
        }

    def test_none_payload(self, services):
        assert isinstance(services.users.register(None).error, ValidationFailed)

    @pytest.mark.parametrize('password', ['x' * 100, '\u00e9' * 40])
    def test_password_longer_than_bcrypt_accepts(self, services, password):
        result = services.users.register(_payload(password=password))
        assert isinstance(result.error, ValidationFailed)
        assert [v.field for v in result.error.violations] == ['password']


class TestCreateUser:

    def test_admin_creates_any_role(self, services, admin, identity_for):
        result = services.users.create_user(identity_for(admin), _payload(role='admin'))
        assert result.ok
        assert result.value['role'] == 'admin'

    def test_non_admin_cannot_create(self, services, coach, identity_for):
        result = services.users.create_user(identity_for(coach), _payload())
        assert isinstance(result.error, Forbidden)


class TestReads:

    def test_list_and_get(self, services, player, coach):
        users = services.users.list_users().value
        assert [u['id'] for u in users] == [player['id'], coach['id']]
        assert services.users.get_user(coach['id']).value['email'] == 'casey@example.com'

    def test_get_missing(self, services):
        assert isinstance(services.users.get_user(999).error, NotFound)

    def test_get_id_beyond_64_bits(self, services):
        assert isinstance(services.users.get_user(2 ** 70).error, NotFound)

    def test_users_by_team(self, services, teams, coach, player):
        users = services.users.get_users_by_team(teams[0]).value
        assert [u['id'] for u in users] == [coach['id'], player['id']]

    def test_users_by_missing_team(self, services):
        assert isinstance(services.users.get_users_by_team(404).error, NotFound)


class TestUpdateUser:

    def test_self_edit(self, services, player, identity_for):
        result = services.users.update_user(
            identity_for(player), player['id'], {'first_name': 'Patricia'}
        )
        assert result.ok
        assert result.value['first_name'] == 'Patricia'
        assert result.value['last_name'] == 'Tester'

    def test_cannot_edit_someone_else(self, services, player, other_player, identity_for):
        result = services.users.update_user(
            identity_for(player), other_player['id'], {'first_name': 'X'}
        )
        assert isinstance(result.error, Forbidden)

    def test_admin_edits_anyone(self, services, admin, player, identity_for):
        result = services.users.update_user(identity_for(admin), player['id'], {'last_name': 'Q'})
        assert result.value['last_name'] == 'Q'

    def test_only_admin_changes_roles(self, services, admin, player, identity_for):
        denied = services.users.update_user(identity_for(player), player['id'], {'role': 'coach'})
        assert isinstance(denied.error, Forbidden)

        allowed = services.users.update_user(identity_for(admin), player['id'], {'role': 'coach'})
        assert allowed.value['role'] == 'coach'

    def test_unknown_role_is_invalid_not_forbidden(self, services, player, identity_for):
        result = services.users.update_user(identity_for(player), player['id'], {'role': 'wizard'})
        assert isinstance(result.error, ValidationFailed)
        assert result.error.violations[0].field == 'role'

    def test_long_password_on_update(self, services, player, identity_for):
        result = services.users.update_user(
            identity_for(player), player['id'], {'password': 'y' * 73}
        )
        assert isinstance(result.error, ValidationFailed)

    def test_restating_own_role_is_allowed(self, services, player, identity_for):
        result = services.users.update_user(identity_for(player), player['id'], {'role': 'player'})
        assert result.ok

    def test_email_taken(self, services, player, coach, identity_for):
        result = services.users.update_user(
            identity_for(player), player['id'], {'email': 'casey@example.com'}
        )
        assert isinstance(result.error, Conflict)

    def test_password_change_rehashes(self, services, player, identity_for, password):
        result = services.users.update_user(
            identity_for(player), player['id'], {'password': 'brand-new-secret'}
        )
        assert result.ok
        assert not services.auth.authenticate('pat@example.com', password).ok
        assert services.auth.authenticate('pat@example.com', 'brand-new-secret').ok

    def test_invalid_update(self, services, player, identity_for):
        result = services.users.update_user(identity_for(player), player['id'], {'email': 'bad'})
        assert isinstance(result.error, ValidationFailed)

    def test_missing_user(self, services, admin, identity_for):
        result = services.users.update_user(identity_for(admin), 999, {'first_name': 'X'})
        assert isinstance(result.error, NotFound)


class TestDeleteUser:

    def test_self_delete(self, services, player, identity_for):
        result = services.users.delete_user(identity_for(player), player['id'])
        assert result.ok
        assert isinstance(services.users.get_user(player['id']).error, NotFound)

    def test_cannot_delete_others(self, services, player, other_player, identity_for):
        result = services.users.delete_user(identity_for(player), other_player['id'])
        assert isinstance(result.error, Forbidden)
        assert result.error.message == 'Unauthorized to delete this account'

    def test_admin_deletes_anyone(self, services, admin, player, identity_for):
        assert services.users.delete_user(identity_for(admin), player['id']).ok

    def test_coach_with_team_cannot_be_deleted(self, services, coach, teams, identity_for):
        result = services.users.delete_user(identity_for(coach), coach['id'])
        assert isinstance(result.error, Conflict)

    def test_player_on_team_is_removed_from_roster(self, services, player, teams, identity_for):
        assert services.users.delete_user(identity_for(player), player['id']).ok
        team = services.teams.get_team(teams[0]).value
        assert team['players'] == []

    def test_admin_deleting_missing_user(self, services, admin, identity_for):
        result = services.users.delete_user(identity_for(admin), 999)
        assert isinstance(result.error, NotFound)
