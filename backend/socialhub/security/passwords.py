"""
SocialHub Backend — Password Hashing
=====================================

What:  One-way adaptive hashing of account passwords.
How:   passlib's CryptContext with the bcrypt scheme. Each digest embeds its
       own random salt and cost factor, so verify() needs only the digest.
Who:   Injected into AuthService/UserService; registration calls hash()
       exactly once, login calls verify() exactly once.

Handling rules:
    - The plaintext is never logged, persisted, or returned.
    - A malformed or foreign digest verifies as False instead of raising,
      so a corrupted row reads as "wrong password" to the login flow.
    - bcrypt ignores everything past byte 72. Longer passwords are refused
      by hash() and never verify, so two passwords sharing a 72-byte prefix
      cannot stand in for each other.
"""

import logging
from typing import Optional

from passlib.context import CryptContext

from socialhub.config import settings

logger = logging.getLogger(__name__)

# bcrypt input limit, counted in UTF-8 bytes
MAX_PASSWORD_BYTES = 72


def exceeds_bcrypt_limit(plaintext: str) -> bool:
    return len(plaintext.encode("utf-8")) > MAX_PASSWORD_BYTES


class PasswordHasher:
    """
    bcrypt-backed password hasher.

    Args:
        rounds: bcrypt cost factor; defaults to settings.bcrypt_rounds.
    """

    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds or settings.bcrypt_rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=self.rounds,
        )

    def hash(self, plaintext: str) -> str:
        """Return a salted bcrypt digest for `plaintext`."""
        if exceeds_bcrypt_limit(plaintext):
            raise ValueError(f"Password longer than {MAX_PASSWORD_BYTES} bytes")
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        """True iff `plaintext` matches `digest`."""
        if not digest or exceeds_bcrypt_limit(plaintext):
            return False
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError):
            logger.warning("Stored password digest could not be parsed")
            return False


# Default instance for the FastAPI dependency (see get_password_hasher)
password_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    """FastAPI dependency; tests override it to inject a low-cost hasher."""
    return password_hasher
