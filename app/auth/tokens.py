# =============================================================================
# app/auth/tokens.py - Access Token Issuing and Verification
# =============================================================================
# HS256-signed JWTs (python-jose) carrying sub, email, iat and exp.
# Also owns the auth cookie so every route sets it the same way.
# =============================================================================

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import Response
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser, TokenPayload
from app.config import Settings
from app.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)


def create_access_token(
    user_id: UUID | str,
    email: str | None,
    settings: Settings,
    now: datetime | None = None,
) -> str:
    """
    Sign an access token for a user.

    Args:
        user_id: The user's UUID (becomes the "sub" claim)
        email: The user's email
        settings: Provides JWT_SECRET, JWT_ALGORITHM and lifetime
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + settings.jwt_expire_delta

    payload = TokenPayload(
        sub=str(user_id),
        email=email,
        iat=int(issued_at.timestamp()),
        exp=int(expires_at.timestamp()),
    )

    return jwt.encode(
        payload.model_dump(),
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings) -> AuthUser:
    """
    Verify a token's signature and expiry and build the identity context.

    Raises:
        UnauthenticatedError: 401 if the token is invalid, expired or has no
            usable user ID
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require_exp": True},
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise UnauthenticatedError("Not authorized, token expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise UnauthenticatedError("Not authorized, token invalid")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise UnauthenticatedError("Not authorized, token invalid")

    try:
        user_uuid = UUID(str(user_id))
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise UnauthenticatedError("Not authorized, token invalid")

    iat = payload.get("iat")
    exp = payload.get("exp")

    return AuthUser(
        id=user_uuid,
        email=payload.get("email"),
        issued_at=datetime.fromtimestamp(iat, tz=timezone.utc) if isinstance(iat, (int, float)) else None,
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if isinstance(exp, (int, float)) else None,
        claims=payload,
    )


# =============================================================================
# Cookie Helpers
# =============================================================================

def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """
    Store the token in an HttpOnly cookie.

    Cross-site frontends need SameSite=None, which browsers only accept
    together with Secure.
    """
    secure = settings.cookie_secure
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=int(settings.jwt_expire_delta.total_seconds()),
        httponly=True,
        secure=secure,
        samesite="none" if secure else "lax",
        path="/",
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    """Remove the auth cookie."""
    secure = settings.cookie_secure
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=secure,
        samesite="none" if secure else "lax",
        path="/",
    )
