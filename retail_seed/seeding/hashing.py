"""
Credential Hasher

bcrypt hashing for seeded user passwords. Each call draws a fresh salt,
so hashing the same secret twice yields two different stored values.
"""

import bcrypt
import structlog

from retail_seed.errors import HashFailure

logger = structlog.get_logger(__name__)

DEFAULT_ROUNDS = 12


class CredentialHasher:
    """Salted one-way hashing with a configurable bcrypt cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, secret: str) -> str:
        """
        Hash a plaintext secret.

        Raises:
            HashFailure: If the secret is empty or bcrypt fails
        """
        if not secret:
            raise HashFailure("Refusing to hash an empty secret")
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            hashed = bcrypt.hashpw(secret.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            logger.error("Password hashing failed", rounds=self.rounds, error=str(e))
            raise HashFailure(f"bcrypt hashing failed: {e}") from e

        if hashed == secret:
            raise HashFailure("Hash output equals its input")
        return hashed

    @staticmethod
    def verify(secret: str, hashed: str) -> bool:
        """Check a plaintext secret against a stored bcrypt hash."""
        if not hashed:
            return False
        return bcrypt.checkpw(secret.encode("utf-8"), hashed.encode("utf-8"))
