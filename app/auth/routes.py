# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for registering, logging in and out, and reading the
# current user. Register and login set the HttpOnly auth cookie and also
# return the token for clients that prefer the Authorization header.
# =============================================================================

import logging

from fastapi import APIRouter, Response, status

from app.auth.dependencies import CurrentUser
from app.auth.models import TokenVerification
from app.auth.tokens import clear_auth_cookie, create_access_token, set_auth_cookie
from app.dependencies import SettingsDep, UserServiceDep
from app.exceptions import UnauthenticatedError
from core.models.envelope import Envelope, success_envelope
from core.models.user import AuthResult, LoginRequest, RegisterRequest, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=Envelope[AuthResult],
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    response: Response,
    users: UserServiceDep,
    settings: SettingsDep,
):
    """
    Create an account and log it in.

    Raises:
        409: If the email is already registered
    """
    user = users.register(body)
    token = create_access_token(user["id"], user["email"], settings)
    set_auth_cookie(response, token, settings)

    return success_envelope(
        AuthResult(user=UserResponse.model_validate(user), token=token),
        message="User registered successfully",
    )


@router.post("/login", response_model=Envelope[AuthResult])
def login(
    body: LoginRequest,
    response: Response,
    users: UserServiceDep,
    settings: SettingsDep,
):
    """
    Log in with email and password.

    Raises:
        401: If the credentials are wrong
    """
    user = users.authenticate(body.email, body.password)
    token = create_access_token(user["id"], user["email"], settings)
    set_auth_cookie(response, token, settings)

    logger.info(f"User logged in: {user['id']}")
    return success_envelope(
        AuthResult(user=UserResponse.model_validate(user), token=token),
        message="Logged in successfully",
    )


@router.post("/logout", response_model=Envelope[dict])
def logout(response: Response, settings: SettingsDep):
    """Clear the auth cookie. Always succeeds."""
    clear_auth_cookie(response, settings)
    return success_envelope({"logged_out": True}, message="Logged out successfully")


@router.get("/me", response_model=Envelope[UserResponse])
def get_current_user_info(
    user: CurrentUser,
    users: UserServiceDep,
):
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated, or the account no longer exists
    """
    profile = users.get_user(user.id)
    if not profile:
        # Token is valid but the account was removed
        raise UnauthenticatedError("Not authorized, user not found")

    return success_envelope(UserResponse.model_validate(profile))


@router.get("/verify", response_model=Envelope[TokenVerification])
async def verify_token(user: CurrentUser):
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return success_envelope(
        TokenVerification(
            valid=True,
            user_id=user.id,
            email=user.email,
            expires_at=user.expires_at,
        )
    )
