"""
Password hashing for the league application.

Provides secure password hashing using bcrypt. Raw passwords never leave
this module in any stored form.
"""

import bcrypt

from league.constants import PASSWORD_MAX_BYTES


class BcryptHasher:
    """Hash and verify secrets with bcrypt.

    Args:
        rounds: bcrypt cost factor (log2 of the iteration count).

    Example:
        >>> hasher = BcryptHasher(rounds=4)
        >>> digest = hasher.hash('my_secure_password')
        >>> hasher.verify('my_secure_password', digest)
        True
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_digest = None

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: The plaintext password to hash.

        Returns:
            The hashed password as a string.
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against a bcrypt hash.

        Every call with a stored hash costs one bcrypt check, whatever
        the password looks like.

        Args:
            password: The plaintext password to verify.
            hashed: The bcrypt hash to check against.

        Returns:
            True if the password matches, False otherwise.
        """
        if not hashed:
            return False
        try:
            matched = bcrypt.checkpw(_secret(password), hashed.encode('utf-8'))
        except (ValueError, TypeError):
            return False
        return matched and _usable(password)

    def burn(self, password: str) -> None:
        """Spend one verification on a throwaway digest.

        Used when the account does not exist, so an unknown email costs as
        much time as a wrong password.
        """
        if self._dummy_digest is None:
            self._dummy_digest = self.hash('league-dummy-password')
        self.verify(password, self._dummy_digest)


def _usable(password) -> bool:
    return (isinstance(password, str)
            and 0 < len(password.encode('utf-8')) <= PASSWORD_MAX_BYTES)


def _secret(password) -> bytes:
    # Malformed input still costs one bcrypt check
    if not _usable(password):
        return b'league-unusable-password'
    return password.encode('utf-8')
