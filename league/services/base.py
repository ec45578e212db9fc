"""
Base service class with transaction management.

Provides a foundation for all service classes with:
- Transaction context manager for automatic commit/rollback
- Translation of persistence failures into the league error taxonomy
- The ``service_operation`` boundary that turns every failure into a result
- Authorization checks against the injected policy
"""

from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, Iterable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from league import db
from league.dataclasses import Identity
from league.enums import Action
from league.errors import Conflict, Forbidden, NotFound, ServiceError, UpstreamFailure
from league.logger import get_logger
from league.policy import AuthorizationPolicy
from league.repositories.base import ConstraintViolation, RecordNotFound
from league.results import Failure

logger = get_logger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def service_operation(method: F) -> F:
    """Decorator marking a public service method as a result boundary.

    Failures returned as values pass through untouched. Any ServiceError
    raised inside (usually from ``transaction()``) is returned as a Failure,
    and anything unexpected becomes an UpstreamFailure so no request can
    take the process down.
    """
    @wraps(method)
    def wrapper(self, *args: Any, **kwargs: Any):
        try:
            return method(self, *args, **kwargs)
        except ServiceError as e:
            logger.warning(f"{method.__qualname__} failed: {e.message}")
            return Failure(e)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Unexpected error in {method.__qualname__}: {e}", exc_info=True)
            return Failure(UpstreamFailure('An unexpected error occurred'))
    return wrapper  # type: ignore


class BaseService:
    """Base class for all services.

    Provides transaction management and authorization helpers. Services
    should inherit from this class to ensure consistent error handling
    and database transaction management.

    Example:
        class GameService(BaseService):
            @service_operation
            def delete_game(self, identity, game_id):
                with self.transaction():
                    # Automatically commits on success, rolls back on exception
                    ...
    """

    def __init__(self, policy: Optional[AuthorizationPolicy] = None):
        self.policy = policy or AuthorizationPolicy()

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """Context manager for database transactions.

        Automatically commits on successful completion and rolls back on any
        exception. Re-raises ServiceError subclasses as-is and wraps
        persistence errors so callers never see a storage engine's
        exception types.

        Raises:
            NotFound: A repository lookup found no row.
            Conflict: The store rejected the write.
            UpstreamFailure: Any other database error.
        """
        try:
            yield
            db.session.commit()
        except ServiceError:
            db.session.rollback()
            raise
        except RecordNotFound as e:
            db.session.rollback()
            raise NotFound(str(e))
        except (ConstraintViolation, IntegrityError) as e:
            db.session.rollback()
            logger.warning(f"Constraint violation: {e}")
            raise Conflict('The change conflicts with existing data')
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database error: {e}", exc_info=True)
            raise UpstreamFailure()

    def authorize(
        self,
        identity: Identity,
        action: Action,
        owner_ids: Iterable[Optional[int]],
        message: str = 'Not authorized'
    ) -> Optional[Failure]:
        """Return a Forbidden failure when the policy denies, else None."""
        if self.policy.can_perform_any(identity, action, owner_ids):
            return None
        logger.warning(
            f"Denied {action.value} for user {identity.subject_id} ({identity.role.value})"
        )
        return Failure(Forbidden(message))
