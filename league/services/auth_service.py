"""
Authentication service.

Encapsulates:
- Credential verification and token issuing (login)
- Turning an Authorization header into an authenticated identity
"""

from typing import Optional

from league.auth import BcryptHasher
from league.dataclasses import Identity
from league.enums import Role
from league.errors import InvalidCredentials, Unauthenticated
from league.logger import get_logger, log_audit
from league.repositories.user_repository import UserRepository
from league.results import Failure, Ok, Result
from league.services.base import BaseService, service_operation
from league.tokens import TokenCodec

logger = get_logger(__name__)

BEARER_SCHEME = 'bearer'


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from a ``Bearer <token>`` header, or None."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    return parts[1]


class AuthService(BaseService):
    """Service for login and request identity.

    Args:
        codec: Token codec holding the signing secret.
        hasher: Password hasher.
        user_repo: UserRepository instance (defaults to new instance).
    """

    def __init__(
        self,
        codec: TokenCodec,
        hasher: BcryptHasher,
        user_repo: Optional[UserRepository] = None
    ):
        super().__init__()
        self.codec = codec
        self.hasher = hasher
        self.user_repo = user_repo or UserRepository()

    @service_operation
    def authenticate(self, email: Optional[str], password: Optional[str]) -> Result[dict]:
        """Verify credentials and issue a token.

        Unknown emails and wrong passwords fail identically, and both pay
        for one bcrypt check.

        Returns:
            Ok with subject id, token and expiry, or Failure(InvalidCredentials).
        """
        user = None
        if isinstance(email, str) and email.strip():
            user = self.user_repo.find_by_email(email)

        if user is None:
            self.hasher.burn(password)
            logger.info("Login rejected")
            return Failure(InvalidCredentials())

        if not self.hasher.verify(password, user.password_hash):
            logger.info(f"Login rejected for user {user.id}")
            return Failure(InvalidCredentials())

        issued = self.codec.issue(user.id)
        log_audit('login', 'user', user.id, actor_id=user.id)

        return Ok({
            'subject_id': user.id,
            'token': issued.token,
            'token_expiry': issued.expires_at.isoformat(),
            'full_name': user.full_name,
            'role': user.role,
        })

    @service_operation
    def identify(self, authorization: Optional[str]) -> Result[Identity]:
        """Resolve the caller behind an Authorization header.

        Returns:
            Ok(Identity), or a Failure carrying Unauthenticated or one of
            its token-specific subclasses.
        """
        token = extract_bearer_token(authorization)
        if token is None:
            return Failure(Unauthenticated('Authentication required'))

        verified = self.codec.verify(token)
        if not verified.ok:
            return verified

        user = self.user_repo.get(verified.value)
        if user is None:
            return Failure(Unauthenticated('Account no longer exists'))

        return Ok(Identity(subject_id=user.id, role=Role(user.role)))
