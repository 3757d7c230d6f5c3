"""Password hashing."""

import logging

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from rencontre_repas.errors import HashingError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


def _until_nul(password):
    """Cut a secret at its first NUL, as the C bcrypt primitive reads it."""
    if isinstance(password, str):
        return password.split("\0", 1)[0]
    return password


class PasswordHasher:
    """One-way, salted password hashing backed by bcrypt."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        try:
            return self.context.hash(_until_nul(password))
        except (ValueError, TypeError, MemoryError) as e:
            raise HashingError(f"bcrypt hashing failed: {e}") from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        try:
            return self.context.verify(_until_nul(password), hashed_password)
        except (UnknownHashError, ValueError, TypeError):
            logger.warning("Refusing to verify against a malformed password hash")
            return False
