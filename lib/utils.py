# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small helpers for values going into Supabase queries and rows.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID


def normalize_uuid(value: str | UUID) -> str:
    """
    Return the string form PostgREST filters expect.

    Route handlers pass UUID objects (validated path params), services
    sometimes pass ids read back from rows (already strings).

    Example:
        normalize_uuid(UUID("550e8400-e29b-41d4-a716-446655440000"))
        # -> "550e8400-e29b-41d4-a716-446655440000"
    """
    if isinstance(value, UUID):
        return str(value)
    return value


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (for timestamp columns)."""
    return datetime.now(timezone.utc).isoformat()
