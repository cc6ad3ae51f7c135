# =============================================================================
# app/auth/dependencies.py - Authentication Gate
# =============================================================================
# Provides dependency injection for authentication.
#
# Token sources, checked in this order:
# 1. The auth cookie (AUTH_COOKIE_NAME, "token" by default)
# 2. The Authorization header ("Bearer <token>")
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request

from app.auth.models import AuthUser
from app.auth.tokens import decode_access_token
from app.config import Settings
from app.dependencies import get_app_settings
from app.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)


def extract_token(request: Request, cookie_name: str) -> Optional[str]:
    """
    Find the access token on a request.

    The cookie wins when both the cookie and the Authorization header are
    present. Non-Bearer Authorization schemes are ignored.

    Returns:
        The raw token, or None if the request carries none
    """
    cookie_token = (request.cookies.get(cookie_name) or "").strip()
    if cookie_token:
        return cookie_token

    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()

    return None


def authorize(request: Request, settings: Settings) -> AuthUser:
    """
    Run the auth gate for a request.

    Extracts the token, verifies signature and expiry, and attaches the
    resulting identity to request.state.user.

    Raises:
        UnauthenticatedError: 401 if the token is missing, invalid or expired
    """
    token = extract_token(request, settings.AUTH_COOKIE_NAME)
    if not token:
        logger.debug(f"No token on {request.method} {request.url.path}")
        raise UnauthenticatedError("Not authorized, token missing")

    user = decode_access_token(token, settings)
    request.state.user = user

    logger.debug(f"Authenticated user: {user.id}")
    return user


async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> AuthUser:
    """
    Extract and validate the user from the request's JWT.

    Returns:
        AuthUser: The authenticated user

    Raises:
        UnauthenticatedError: 401 if token is missing, invalid or expired

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    return authorize(request, settings)


async def get_current_user_optional(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Optional[AuthUser]:
    """
    Optionally get the current user from the request's JWT.

    Returns None if no token is provided or the token is invalid, instead
    of raising an error. Useful for endpoints that work with or without
    authentication.
    """
    try:
        return authorize(request, settings)
    except UnauthenticatedError:
        return None


# Type alias for dependency injection
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
