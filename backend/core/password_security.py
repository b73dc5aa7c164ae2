"""
Password hashing for user credentials.

Passwords are hashed with bcrypt through passlib's ``CryptContext``. Each hash
embeds its own random salt and cost factor, so hashing the same password
twice produces two different strings that both verify.

bcrypt only reads the first 72 bytes of a password and cannot hash NUL
bytes. Hashing such a password raises ``PasswordValueError`` instead of
silently truncating it, and verifying one always fails.
"""

import logging

from passlib.context import CryptContext
from passlib.exc import PasswordValueError

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12
BCRYPT_MAX_PASSWORD_BYTES = 72

__all__ = [
    "BCRYPT_MAX_PASSWORD_BYTES",
    "PasswordHasher",
    "PasswordValueError",
    "is_hashable_password",
]


def is_hashable_password(password: str) -> bool:
    """True when bcrypt can hash ``password`` without altering it."""
    return (
        "\x00" not in password
        and len(password.encode("utf-8")) <= BCRYPT_MAX_PASSWORD_BYTES
    )


class PasswordHasher:
    """Salted, deliberately slow one-way password hashing."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__default_rounds=rounds,
            bcrypt__min_rounds=rounds,
            bcrypt__truncate_error=True,
        )

    def hash_password(self, password: str) -> str:
        """
        Hash ``password``.

        Raises:
            PasswordValueError: the password contains a NUL byte or is longer
                than 72 bytes
        """
        return self.pwd_context.hash(password)

    def verify_password(self, password: str, hashed_password: str) -> bool:
        """
        Check ``password`` against a stored hash.

        Returns ``False`` instead of raising when the stored value is not a
        recognisable hash or either argument is unusable.
        """
        if not password or not hashed_password:
            return False
        # No stored hash can come from an unhashable password, and bcrypt
        # would otherwise match on the first 72 bytes only
        if not is_hashable_password(password):
            return False
        try:
            return self.pwd_context.verify(password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification failed on malformed hash: {e}")
            return False

    def needs_rehash(self, hashed_password: str) -> bool:
        """True when the hash was produced with an outdated cost factor."""
        try:
            return self.pwd_context.needs_update(hashed_password)
        except (ValueError, TypeError):
            return False
