"""
Centralized error handling for the application.

Defines the failure taxonomy shared by the validators, the token codec and
the service layer, plus the Flask error handlers that turn anything raised
outside a service into a consistent JSON body.
"""

from typing import Any, Dict, Iterable, Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from league.dataclasses import Violation
from league.logger import get_logger

logger = get_logger(__name__)


class ServiceError(Exception):
    """Base exception for service layer errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error response.
        code: Stable discriminant clients can switch on.
    """

    code = 'service_error'
    default_message = 'Request failed'
    default_status = 400

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {'success': False, 'error': self.message, 'code': self.code}


class ValidationFailed(ServiceError):
    """Raised when one or more entity invariants do not hold."""

    code = 'validation_failed'
    default_message = 'Validation failed'
    default_status = 400

    def __init__(self, violations: Iterable[Violation]):
        self.violations = list(violations)
        message = '; '.join(f'{v.field}: {v.reason}' for v in self.violations)
        super().__init__(message or self.default_message)

    @classmethod
    def single(cls, field: str, reason: str) -> 'ValidationFailed':
        return cls([Violation(field, reason)])

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body['violations'] = [v.to_dict() for v in self.violations]
        return body


class Unauthenticated(ServiceError):
    """No usable identity was presented."""

    code = 'unauthenticated'
    default_message = 'Authentication required'
    default_status = 401
    reason = 'missing'

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body['reason'] = self.reason
        return body


class InvalidCredentials(Unauthenticated):
    """Unknown email or wrong password; deliberately indistinguishable."""

    default_message = 'Invalid email or password'
    reason = 'invalid_credentials'


class TokenExpired(Unauthenticated):
    default_message = 'Token has expired'
    reason = 'token_expired'


class TokenMalformed(Unauthenticated):
    default_message = 'Token is malformed'
    reason = 'token_malformed'


class TokenSignatureInvalid(Unauthenticated):
    default_message = 'Token signature is invalid'
    reason = 'token_signature_invalid'


class Forbidden(ServiceError):
    """Authenticated, but the policy denied the action."""

    code = 'forbidden'
    default_message = 'Not authorized'
    default_status = 403


class NotFound(ServiceError):
    """Exception raised when a requested resource is not found."""

    code = 'not_found'
    default_message = 'Resource not found'
    default_status = 404


class Conflict(ServiceError):
    """A unique field or a referential constraint would be broken."""

    code = 'conflict'
    default_message = 'Conflicting resource'
    default_status = 409


class UpstreamFailure(ServiceError):
    """The persistence layer failed unexpectedly."""

    code = 'upstream_failure'
    default_message = 'Database operation failed'
    default_status = 500


def register_error_handlers(app: Flask) -> None:
    """Register centralized error handlers with the Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(error: ServiceError):
        """Handle ServiceError exceptions (including subclasses)."""
        logger.warning(f"Service error: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(400)
    def handle_bad_request(error):
        """Handle 400 Bad Request errors."""
        return jsonify({
            'success': False,
            'error': 'Bad request',
            'code': 'bad_request'
        }), 400

    @app.errorhandler(404)
    def handle_not_found(error):
        """Handle 404 Not Found errors."""
        return jsonify(NotFound().to_dict()), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        """Handle 405 Method Not Allowed errors."""
        return jsonify({
            'success': False,
            'error': 'Method not allowed',
            'code': 'method_not_allowed'
        }), 405

    @app.errorhandler(429)
    def handle_rate_limit(error):
        """Handle 429 Too Many Requests errors."""
        return jsonify({
            'success': False,
            'error': 'Too many requests. Please try again later.',
            'code': 'rate_limited'
        }), 429

    @app.errorhandler(500)
    def handle_internal_error(error):
        """Handle 500 Internal Server errors.

        Logs the error and returns a generic message to avoid
        exposing internal details.
        """
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'An internal error occurred',
            'code': 'internal_error'
        }), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        """Handle unexpected exceptions.

        HTTP exceptions keep their own status; anything else becomes a 500.
        """
        if isinstance(error, HTTPException):
            return error
        logger.error(f"Unexpected error: {error}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'An unexpected error occurred',
            'code': 'internal_error'
        }), 500
