"""
Tests for team API endpoints.
"""


class TestTeamEndpoints:
    """Tests for /teams routes."""

    def test_create_team(self, client, coach, player, auth_header):
        response = client.post('/teams', headers=auth_header(coach), json={
            'name': 'Hawks',
            'coach_id': coach['id'],
            'player_ids': [player['id']],
        })

        assert response.status_code == 201
        team = response.get_json()['team']
        assert team['coach']['email'] == 'casey@example.com'
        assert [p['id'] for p in team['players']] == [player['id']]

    def test_create_team_for_other_coach_forbidden(self, client, coach, other_coach, auth_header):
        response = client.post('/teams', headers=auth_header(coach), json={
            'name': 'Hawks',
            'coach_id': other_coach['id'],
        })

        assert response.status_code == 403

    def test_create_team_invalid(self, client, admin, auth_header):
        response = client.post('/teams', headers=auth_header(admin), json={'player_ids': 'x'})

        assert response.status_code == 400
        fields = {v['field'] for v in response.get_json()['violations']}
        assert fields == {'name', 'coach_id', 'player_ids'}

    def test_list_and_get(self, client, teams, player, auth_header):
        headers = auth_header(player)

        listed = client.get('/teams', headers=headers).get_json()['teams']
        assert [t['id'] for t in listed] == teams

        team = client.get(f'/teams/{teams[0]}', headers=headers).get_json()['team']
        assert team['name'] == 'Home United'

    def test_teams_by_user(self, client, teams, other_player, auth_header):
        response = client.get(f"/teams/user/{other_player['id']}",
                              headers=auth_header(other_player))

        assert response.status_code == 200
        assert [t['id'] for t in response.get_json()['teams']] == [teams[1]]

    def test_edit_team(self, client, teams, coach, auth_header):
        response = client.put(f'/teams/edit/{teams[0]}', headers=auth_header(coach),
                              json={'name': 'Home City'})

        assert response.status_code == 200
        assert response.get_json()['team']['name'] == 'Home City'

    def test_edit_team_of_other_coach(self, client, teams, other_coach, auth_header):
        response = client.put(f'/teams/edit/{teams[0]}', headers=auth_header(other_coach),
                              json={'name': 'Stolen'})

        assert response.status_code == 403

    def test_delete_team(self, client, teams, coach, auth_header):
        response = client.delete(f'/teams/{teams[0]}', headers=auth_header(coach))

        assert response.status_code == 200
        assert client.get(f'/teams/{teams[0]}', headers=auth_header(coach)).status_code == 404

    def test_delete_missing_team(self, client, admin, auth_header):
        response = client.delete('/teams/404', headers=auth_header(admin))

        assert response.status_code == 404

    def test_requires_authentication(self, client, teams):
        assert client.get('/teams').status_code == 401
        assert client.post('/teams', json={}).status_code == 401
