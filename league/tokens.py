"""
Identity tokens.

Tokens are HS256 JWTs carrying ``sub`` (user id), ``iat`` and ``exp``. The
codec owns its signing secret and expiry window; nothing about a token is
stored server side. Expiry is checked against an injected clock so the
window can be tested without sleeping.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

import jwt

from league.dataclasses import IssuedToken
from league.errors import TokenExpired, TokenMalformed, TokenSignatureInvalid
from league.results import Failure, Ok, Result

REQUIRED_CLAIMS = ('sub', 'iat', 'exp')


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class TokenCodec:
    """Sign and verify identity tokens.

    Args:
        secret: HMAC signing key.
        expires_in: Lifetime of an issued token.
        clock: Source of the current time (defaults to the system clock).
        algorithm: JWT signing algorithm.
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta,
        clock: Optional[Any] = None,
        algorithm: str = 'HS256'
    ):
        if not secret:
            raise ValueError('Token signing secret must not be empty')
        self._secret = secret
        self.expires_in = expires_in
        self.clock = clock or SystemClock()
        self.algorithm = algorithm

    @classmethod
    def from_config(cls, config: Mapping[str, Any], clock: Optional[Any] = None) -> 'TokenCodec':
        return cls(
            secret=config['JWT_SECRET_KEY'],
            expires_in=config['JWT_EXPIRES_IN'],
            clock=clock,
            algorithm=config.get('JWT_ALGORITHM', 'HS256'),
        )

    def issue(self, subject_id: int) -> IssuedToken:
        """Sign a token for ``subject_id`` valid for ``expires_in``."""
        issued_at = self.clock.now().replace(microsecond=0)
        expires_at = issued_at + self.expires_in
        token = jwt.encode(
            {'sub': str(subject_id), 'iat': issued_at, 'exp': expires_at},
            self._secret,
            algorithm=self.algorithm,
        )
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> Result[int]:
        """Check signature, shape and expiry; return the subject id."""
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                # Expiry is judged against self.clock below
                options={
                    'require': list(REQUIRED_CLAIMS),
                    'verify_exp': False,
                    'verify_iat': False,
                    'verify_nbf': False,
                },
            )
        except jwt.InvalidSignatureError:
            return Failure(TokenSignatureInvalid())
        except jwt.InvalidTokenError:
            return Failure(TokenMalformed())

        subject = claims['sub']
        if not isinstance(subject, str) or not subject.isdigit():
            return Failure(TokenMalformed())
        expires_at = claims['exp']
        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            return Failure(TokenMalformed())

        if self.clock.now().timestamp() >= expires_at:
            return Failure(TokenExpired())
        return Ok(int(subject))
