# =============================================================================
# core/services/password_service.py - Password Hashing
# =============================================================================
# Argon2id hashing and verification for account passwords.
# =============================================================================

import logging

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

logger = logging.getLogger(__name__)

# Hashed once per PasswordService for verify_dummy(); never stored
DUMMY_PASSWORD = "no-such-account"


class PasswordService:
    """Hash and verify passwords using Argon2id."""

    def __init__(self, time_cost: int = 2, memory_cost: int = 65536, parallelism: int = 2):
        self.hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
        )
        self._dummy_hash: str | None = None

    def hash_password(self, password: str) -> str:
        """
        Hash a password using Argon2id.

        Args:
            password: Plain text password to hash

        Returns:
            Argon2 hash string (salt and parameters embedded)
        """
        return self.hasher.hash(password)

    def verify_password(self, password: str, password_hash: str | None) -> bool:
        """
        Verify a password against its hash.

        Returns False on mismatch and on a missing or malformed hash.
        """
        if not password_hash:
            return False

        try:
            return self.hasher.verify(password_hash, password)
        except VerifyMismatchError:
            logger.debug("Password verification failed - mismatch")
            return False
        except (VerificationError, InvalidHashError) as e:
            logger.error(f"Password verification error - invalid hash: {e}")
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True if the hash was made with older parameters."""
        return self.hasher.check_needs_rehash(password_hash)

    def verify_dummy(self, password: str) -> None:
        """
        Spend one verification on a throwaway hash.

        Called when there is no stored hash to check, so a login for an
        unknown email takes as long as a wrong password for a real one.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(DUMMY_PASSWORD)
        self.verify_password(password, self._dummy_hash)
