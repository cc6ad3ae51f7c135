# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication: token issuing, the cookie/header auth
# gate, and the /api/auth routes.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    CurrentUser,
    authorize,
    extract_token,
    get_current_user,
    get_current_user_optional,
)
from app.auth.models import AuthUser
from app.auth.tokens import create_access_token, decode_access_token

__all__ = [
    "CurrentUser",
    "authorize",
    "extract_token",
    "get_current_user",
    "get_current_user_optional",
    "AuthUser",
    "create_access_token",
    "decode_access_token",
]
