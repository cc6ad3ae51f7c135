# =============================================================================
# core/services/user_service.py - User Accounts
# =============================================================================
# Registration, credential checks and profile lookups against the users table.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import DatabaseError, EmailAlreadyRegisteredError, InvalidCredentialsError
from core.models.user import RegisterRequest
from core.services.password_service import PasswordService
from lib.supabase_client import SupabaseClient, SupabaseClientError, is_unique_violation
from lib.utils import normalize_uuid, utc_now_iso

logger = logging.getLogger(__name__)

USERS_TABLE = "users"

# One instance per process; it caches the dummy hash used for unknown emails
DEFAULT_PASSWORDS = PasswordService()


class UserService:
    """
    Service for user account operations.

    Rows returned by this service still contain password_hash; routes
    serialize them through UserResponse, which drops it.
    """

    def __init__(self, db: SupabaseClient, passwords: PasswordService | None = None):
        self.db = db
        self.passwords = passwords or DEFAULT_PASSWORDS

    def get_user_by_email(self, email: str) -> dict[str, Any] | None:
        """Fetch a user row by (lowercased) email, or None."""
        try:
            return self.db.execute_one(
                self.db.table(USERS_TABLE).select("*").eq("email", email.strip().lower()).limit(1),
                operation="fetch user by email",
            )
        except SupabaseClientError as e:
            raise DatabaseError(str(e)) from e

    def get_user(self, user_id: UUID | str) -> dict[str, Any] | None:
        """Fetch a user row by ID, or None."""
        try:
            return self.db.execute_one(
                self.db.table(USERS_TABLE).select("*").eq("id", normalize_uuid(user_id)).limit(1),
                operation="fetch user",
            )
        except SupabaseClientError as e:
            raise DatabaseError(str(e)) from e

    def register(self, request: RegisterRequest) -> dict[str, Any]:
        """
        Create a new account.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
            DatabaseError: If the insert fails
        """
        if self.get_user_by_email(request.email):
            raise EmailAlreadyRegisteredError(request.email)

        now = utc_now_iso()
        data = {
            "name": request.name.strip(),
            "email": request.email,
            "password_hash": self.passwords.hash_password(request.password),
            "profile_image_url": request.profile_image_url,
            "created_at": now,
            "updated_at": now,
        }

        try:
            user = self.db.execute_one(
                self.db.table(USERS_TABLE).insert(data),
                operation="insert user",
            )
        except SupabaseClientError as e:
            # Lost a race with a concurrent registration for the same email
            if is_unique_violation(e):
                logger.info("Registration rejected: email taken during insert")
                raise EmailAlreadyRegisteredError(request.email) from e
            logger.error(f"Failed to create user: {e}")
            raise DatabaseError(str(e)) from e

        if not user:
            raise DatabaseError("Insert returned no data")

        logger.info(f"Registered user: {user['id']}")
        return user

    def authenticate(self, email: str, password: str) -> dict[str, Any]:
        """
        Check credentials and return the user row.

        Unknown emails are verified against a throwaway hash so both
        rejection paths cost one Argon2 verification. A stored hash made
        with older parameters is upgraded after a successful login.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user = self.get_user_by_email(email)

        if not user:
            self.passwords.verify_dummy(password)
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        stored_hash = user.get("password_hash")
        if not self.passwords.verify_password(password, stored_hash):
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        if self.passwords.needs_rehash(stored_hash):
            self._rehash_password(user, password)

        return user

    def _rehash_password(self, user: dict[str, Any], password: str) -> None:
        """Store a hash with the current parameters. Failure does not block login."""
        new_hash = self.passwords.hash_password(password)
        try:
            self.db.execute(
                self.db.table(USERS_TABLE)
                .update({"password_hash": new_hash, "updated_at": utc_now_iso()})
                .eq("id", str(user["id"])),
                operation="rehash password",
            )
        except SupabaseClientError as e:
            logger.warning(f"Could not upgrade password hash for user {user['id']}: {e}")
            return

        user["password_hash"] = new_hash
        logger.info(f"Upgraded password hash for user: {user['id']}")
