# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a verified JWT.

    This is the identity context for one request: built by the auth gate,
    attached to request.state.user, never persisted.
    """

    model_config = ConfigDict(frozen=True)  # Make immutable

    id: UUID
    email: Optional[str] = None
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    claims: dict[str, Any] = Field(default_factory=dict)


class TokenPayload(BaseModel):
    """
    Claims carried by the access tokens this API issues.
    """

    sub: str  # User ID
    email: Optional[str] = None
    iat: int  # Issued at timestamp
    exp: int  # Expiration timestamp


class TokenVerification(BaseModel):
    """Response for GET /api/auth/verify."""

    valid: bool
    user_id: UUID
    email: Optional[str] = None
    expires_at: Optional[datetime] = None
