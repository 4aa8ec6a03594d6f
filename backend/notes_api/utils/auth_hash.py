"""Password hashing helpers using passlib.

``PasswordHasher`` wraps a passlib ``CryptContext`` configured for bcrypt:
- hash(plain: str) -> str
- verify(plain: str, hashed: str) -> bool

The bcrypt cost defaults to 12 rounds and is configurable through the
``BCRYPT_ROUNDS`` setting (tests use the bcrypt minimum of 4).
"""
from __future__ import annotations

import warnings

from passlib.context import CryptContext

SALT_ROUNDS = 12


def _build_context(rounds: int) -> CryptContext:
    try:
        context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        context.hash("test")
        return context
    except Exception as exc:
        warnings.warn(
            "bcrypt backend not available or failed to initialize; falling back to pbkdf2_sha256. "
            f"Original error: {exc}",
            RuntimeWarning,
        )
        return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasswordHasher:
    def __init__(self, rounds: int = SALT_ROUNDS):
        self.rounds = rounds
        self.context = _build_context(rounds)

    def hash(self, plain: str) -> str:
        """Hash a plaintext password and return the encoded hash string."""
        if plain is None:
            raise ValueError("Password must not be None")
        return self.context.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Returns True if the password matches, False otherwise (including
        when the stored hash is malformed).
        """
        if plain is None or hashed is None:
            return False
        try:
            return self.context.verify(plain, hashed)
        except (ValueError, TypeError):
            return False
