# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a thin wrapper around the Supabase client:
# - Connects once at startup, retrying with exponential backoff
# - Probes the database so a bad URL/key fails at boot, not on first request
# - Wraps query failures in SupabaseClientError with actionable messages
#
# One instance lives on app.state for the lifetime of the process.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   db = SupabaseClient(settings)
#   db.connect()
#   rows = db.execute(db.table("sessions").select("*").eq("user_id", uid))
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client
from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# Table used to check connectivity
PROBE_TABLE = "users"

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def is_unique_violation(error: SupabaseClientError) -> bool:
    """True if the failed query hit a unique constraint (SQLSTATE 23505)."""
    if error.details.get("pg_code") == UNIQUE_VIOLATION_CODE:
        return True
    cause_code = getattr(error.__cause__, "code", None)
    if cause_code is not None and str(cause_code) == UNIQUE_VIOLATION_CODE:
        return True
    return UNIQUE_VIOLATION_CODE in error.message


class SupabaseClient:
    """
    Connection holder for the Supabase database.

    Uses the service_role key which bypasses Row Level Security (RLS);
    ownership checks are done by the services.

    Example:
        db = SupabaseClient(settings)
        db.connect()
        user = db.execute(
            db.table("users").select("*").eq("email", email).limit(1)
        )
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Client | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> Client:
        """
        The connected Supabase client.

        Raises:
            SupabaseClientError: If connect() has not succeeded yet
        """
        if self._client is None:
            raise SupabaseClientError(
                message="Database client used before connecting",
                code="NOT_CONNECTED",
                suggestion="Call SupabaseClient.connect() during application startup",
            )
        return self._client

    # -------------------------------------------------------------------------
    # Connection
    # -------------------------------------------------------------------------

    def _open(self) -> Client:
        """Create a client and run a one-row probe query against it."""
        client = create_client(
            self.settings.SUPABASE_URL,
            self.settings.SUPABASE_SERVICE_KEY.get_secret_value(),
        )
        client.table(PROBE_TABLE).select("id").limit(1).execute()
        return client

    def connect(self) -> Client:
        """
        Open the connection, retrying with exponential backoff.

        Tries DB_CONNECT_ATTEMPTS times, waiting DB_CONNECT_BACKOFF_SECONDS
        before the first retry and doubling each time (capped at 30s).

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If every attempt fails
        """
        if self._client is not None:
            return self._client

        attempts = self.settings.DB_CONNECT_ATTEMPTS
        backoff = self.settings.DB_CONNECT_BACKOFF_SECONDS

        retrying = Retrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=backoff, min=backoff, max=30),
            retry=retry_if_exception_type(Exception),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=False,
        )

        try:
            self._client = retrying(self._open)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            raise SupabaseClientError(
                message=f"Failed to connect to Supabase after {attempts} attempts: {last_error}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
                details={"attempts": attempts},
            ) from last_error

        logger.info("Supabase client initialized successfully")
        return self._client

    def close(self) -> None:
        """Drop the client reference. The HTTP pool is released with it."""
        self._client = None

    def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            self.client.table(PROBE_TABLE).select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Query Helpers
    # -------------------------------------------------------------------------

    def table(self, name: str):
        """Start a query builder on a table."""
        return self.client.table(name)

    def execute(self, query, operation: str = "query") -> list[dict[str, Any]]:
        """
        Run a query builder and return its rows.

        Args:
            query: A Supabase query builder (select/insert/update/delete)
            operation: Short label used in logs and error details

        Returns:
            List of row dicts (empty if nothing matched)

        Raises:
            SupabaseClientError: If the query fails
        """
        try:
            response = query.execute()
        except Exception as e:
            details = {"operation": operation}
            # postgrest.APIError carries the Postgres SQLSTATE as .code
            pg_code = getattr(e, "code", None)
            if pg_code:
                details["pg_code"] = str(pg_code)
            raise SupabaseClientError(
                message=f"Database {operation} failed: {e}",
                code="QUERY_FAILED",
                suggestion="Check that the table exists and the service key has access",
                details=details,
            ) from e

        data = response.data
        if data is None:
            return []
        if isinstance(data, dict):
            return [data]
        return list(data)

    def execute_one(self, query, operation: str = "query") -> dict[str, Any] | None:
        """
        Run a query expected to match at most one row.

        Returns:
            The row dict, or None if nothing matched
        """
        rows = self.execute(query, operation=operation)
        return rows[0] if rows else None
