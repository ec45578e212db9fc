"""
Utility functions for the league routes.

Contains response helpers, request-body access and the authentication
decorator shared by the API blueprints.
"""

from functools import wraps
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from flask import g, jsonify, request

from league.errors import ServiceError, ValidationFailed
from league.results import Result

# Type variable for generic function decoration
F = TypeVar('F', bound=Callable[..., Any])


# ==================== RESPONSE HELPERS ====================

def success_response(
    data: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
    **kwargs: Any
):
    """
    Create a standardized success response.

    Args:
        data: Optional data dictionary to include
        status_code: HTTP status code (default: 200)
        **kwargs: Additional key-value pairs to include

    Returns:
        Tuple of (response, status code)
    """
    response = {'success': True}
    if data:
        response.update(data)
    response.update(kwargs)
    return jsonify(response), status_code


def error_response(error: ServiceError):
    """
    Create a standardized error response from a league error.

    Returns:
        Tuple of (response, status code)
    """
    return jsonify(error.to_dict()), error.status_code


def respond(
    result: Result,
    status_code: int = 200,
    key: Optional[str] = None,
    **extra: Any
):
    """Marshal a service result.

    The value is placed under ``key``; without a key a dict value is merged
    into the body. ``extra`` pairs are added to successful responses only.
    """
    if not result.ok:
        return error_response(result.error)
    value = result.value
    if isinstance(value, dict) and key is None:
        return success_response(value, status_code, **extra)
    return success_response({key or 'data': value}, status_code, **extra)


# ==================== REQUEST HELPERS ====================

def get_json_body() -> Tuple[Optional[Dict[str, Any]], Optional[Tuple[Any, int]]]:
    """Get and validate JSON request body.

    Returns:
        Tuple of (data dict, None) on success, or (None, error_response) on failure.

    Example:
        data, error = get_json_body()
        if error:
            return error
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, error_response(
            ValidationFailed.single('body', 'must be a JSON object')
        )
    return data, None


# ==================== AUTHENTICATION HELPERS ====================

def login_required(f: F) -> F:
    """
    Decorator requiring a valid bearer token.

    Resolves the caller before the view runs and stores it on
    ``g.identity``. Returns 401 if the token is missing or invalid.
    """
    @wraps(f)
    def decorated_function(*args: Any, **kwargs: Any) -> Any:
        from league.services import get_services

        identified = get_services().auth.identify(request.headers.get('Authorization'))
        if not identified.ok:
            return error_response(identified.error)
        g.identity = identified.value
        return f(*args, **kwargs)
    return decorated_function  # type: ignore
