"""
Tests for logging configuration and the audit trail.
"""

import json
import logging

from league.logger import JSONFormatter, configure_logging, get_logger, log_audit


def test_module_loggers_nest_under_league():
    assert get_logger('league.services.game_service').name == 'league.services.game_service'
    assert get_logger('scripts').name == 'league.scripts'


def test_configure_logging_replaces_handler(app):
    root = configure_logging(app)
    configure_logging(app)

    assert len(root.handlers) == 1
    assert root.level == logging.WARNING


def test_json_formatter_includes_request_context(app):
    record = logging.LogRecord('league.test', logging.INFO, __file__, 1, 'hello %s', ('x',), None)

    with app.test_request_context('/games', method='POST', headers={'X-Request-ID': 'abc'}):
        app.preprocess_request()
        for f in configure_logging(app).handlers[0].filters:
            f.filter(record)
        data = json.loads(JSONFormatter().format(record))

    assert data['message'] == 'hello x'
    assert data['request_id'] == 'abc'
    assert data['path'] == '/games'
    assert data['method'] == 'POST'


def test_audit_event(caplog):
    caplog.set_level(logging.INFO, logger='league')

    log_audit('game_created', 'game', 3, actor_id=7, details={'team_ids': [1, 2]})

    assert 'AUDIT: game_created on game (id=3) by user 7 - {"team_ids": [1, 2]}' in caplog.text


def test_login_is_audited(services, player, password, caplog):
    caplog.set_level(logging.INFO, logger='league')

    services.auth.authenticate('pat@example.com', password)

    assert [r for r in caplog.records if r.name == 'league.audit' and 'login' in r.getMessage()]


def test_user_writes_never_log_email(client, admin, auth_header, caplog):
    caplog.set_level(logging.DEBUG, logger='league')

    response = client.post('/users/register', json={
        'first_name': 'Robin',
        'last_name': 'New',
        'email': 'robin.private@example.com',
        'password': 'a-long-password',
    })
    user_id = response.get_json()['user']['id']
    client.put(f'/users/edit/{user_id}', headers=auth_header(admin),
               json={'email': 'robin.moved@example.com'})

    assert f'Created user ID {user_id}' in caplog.text
    assert f'Updated user ID {user_id}' in caplog.text
    assert 'robin.private' not in caplog.text
    assert 'robin.moved' not in caplog.text
