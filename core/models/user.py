# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# Request and response models for account registration and login.
# The stored password hash never appears in any response model.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
MIN_PASSWORD_LENGTH = 8


def _normalize_email(value):
    # Runs before the pattern check; non-strings are left for pydantic to reject
    if isinstance(value, str):
        return value.strip().lower()
    return value


class RegisterRequest(BaseModel):
    """Input for creating an account."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    profile_image_url: str | None = Field(default=None, max_length=2048)

    @field_validator("email", mode="before")
    @classmethod
    def _lowercase_email(cls, value):
        return _normalize_email(value)


class LoginRequest(BaseModel):
    """Input for logging in."""

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def _lowercase_email(cls, value):
        return _normalize_email(value)


class UserResponse(BaseModel):
    """
    Public user profile.

    Built from a users row; extra columns (password_hash) are dropped.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: UUID
    name: str
    email: str
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthResult(BaseModel):
    """Returned by register and login."""

    user: UserResponse
    token: str
