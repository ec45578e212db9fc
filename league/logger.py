"""
Centralized logging configuration for the league application.

Every module logs through a child of the ``league`` logger obtained with
``get_logger(__name__)``. ``configure_logging(app)`` attaches the single
handler to ``league`` from the app config: a readable text format in
development and structured JSON (``LOG_JSON``) in production. Each record
carries the id of the request it was emitted under.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ROOT_LOGGER = 'league'
TEXT_FORMAT = '[%(asctime)s] %(levelname)s [%(request_id)s] %(name)s: %(message)s'


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging in production.

    Outputs logs in JSON format suitable for log aggregation tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
            'request_id': getattr(record, 'request_id', '-'),
        }

        from flask import has_request_context, request
        if has_request_context():
            log_data['path'] = request.path
            log_data['method'] = request.method

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class RequestContextFilter(logging.Filter):
    """Filter that stamps records with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        from flask import g, has_app_context
        record.request_id = getattr(g, 'request_id', '-') if has_app_context() else '-'
        return True


def configure_logging(app) -> logging.Logger:
    """Attach the league handler according to ``app.config``.

    Reads ``LOG_LEVEL`` and ``LOG_JSON``. Any handler from an earlier call
    is replaced, so building several apps in one process (as the tests do)
    never duplicates output.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    # On the handler so records propagated from child loggers are stamped too
    handler.addFilter(RequestContextFilter())
    if app.config.get('LOG_JSON'):
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    root.addHandler(handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger for a module, nested under ``league``.

    Example:
        from league.logger import get_logger
        logger = get_logger(__name__)
        logger.info("Team created")
    """
    if name != ROOT_LOGGER and not name.startswith(f'{ROOT_LOGGER}.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)


def get_audit_logger() -> logging.Logger:
    """Get logger for audit trail of sensitive operations."""
    return get_logger('league.audit')


def log_audit(
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    actor_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """Log an audit event for sensitive operations.

    Args:
        action: The action performed (e.g., 'login', 'user_deleted')
        entity_type: Type of entity affected (e.g., 'user', 'game')
        entity_id: ID of the affected entity
        actor_id: ID of the user who performed the action
        details: Additional details about the action

    Example:
        log_audit('game_created', 'game', game.id, actor_id=identity.subject_id,
                  details={'team_ids': [1, 2]})
    """
    message = f"AUDIT: {action} on {entity_type}"
    if entity_id is not None:
        message += f" (id={entity_id})"
    if actor_id is not None:
        message += f" by user {actor_id}"
    if details:
        message += f" - {json.dumps(details, default=str)}"

    get_audit_logger().info(message)
