# =============================================================================
# app/exceptions.py - Custom Exceptions and the Terminal Error Handler
# =============================================================================
# Centralized exception handling for the API.
#
# Handlers and services raise; nothing converts an error into a response
# except the handlers registered here. Every response they produce is the
# standard envelope: {"success": false, "message": ..., "data": null}.
# =============================================================================

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.models.envelope import error_envelope

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal Server Error"


class InterviewPrepException(Exception):
    """
    Base exception for the InterviewPrep API.

    All custom exceptions inherit from this class.
    Carries the HTTP status the error should map to, plus an optional
    suggestion and details that are logged but not sent to clients.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERVIEWPREP_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result

    def to_envelope(self) -> dict[str, Any]:
        """Convert exception to the API's failure envelope."""
        return error_envelope(self.message)


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthenticatedError(InterviewPrepException):
    """Raised when a protected route is called without a valid token."""

    def __init__(self, message: str = "Not authorized, token missing"):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
            status_code=401,
            suggestion="Log in again to obtain a fresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsError(InterviewPrepException):
    """Raised when login fails. Same message for unknown email and bad password."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class EmailAlreadyRegisteredError(InterviewPrepException):
    """Raised when registering with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            message="User already exists",
            code="EMAIL_ALREADY_REGISTERED",
            status_code=409,
            suggestion="Log in instead, or register with a different email",
            details={"email": email},
        )


# =============================================================================
# Resource Exceptions
# =============================================================================

class SessionNotFoundError(InterviewPrepException):
    """Raised when a session doesn't exist or belongs to someone else."""

    def __init__(self, session_id: str):
        super().__init__(
            message="Session not found",
            code="SESSION_NOT_FOUND",
            status_code=404,
            suggestion="Check that the session_id is correct",
            details={"session_id": session_id},
        )


class QuestionNotFoundError(InterviewPrepException):
    """Raised when a question doesn't exist or belongs to someone else."""

    def __init__(self, question_id: str):
        super().__init__(
            message="Question not found",
            code="QUESTION_NOT_FOUND",
            status_code=404,
            suggestion="Check that the question_id is correct",
            details={"question_id": question_id},
        )


class DatabaseError(InterviewPrepException):
    """Raised when the database can't be reached or a query fails."""

    def __init__(self, error: str):
        super().__init__(
            message="Database unavailable, please try again later",
            code="DATABASE_ERROR",
            status_code=503,
            details={"error": error},
        )


# =============================================================================
# Upstream (AI Provider) Exceptions
# =============================================================================

class UpstreamUnavailableError(InterviewPrepException):
    """Raised when the AI provider returns an error or can't be reached."""

    def __init__(self, error: str, status_code: int = 502):
        super().__init__(
            message="AI service is unavailable, please try again later",
            code="UPSTREAM_UNAVAILABLE",
            status_code=status_code,
            details={"error": error},
        )


class UpstreamTimeoutError(UpstreamUnavailableError):
    """Raised when the AI provider doesn't answer in time."""

    def __init__(self, error: str):
        super().__init__(error, status_code=503)
        self.message = "AI service timed out, please try again"
        self.code = "UPSTREAM_TIMEOUT"


class UpstreamBadResponseError(UpstreamUnavailableError):
    """Raised when the AI provider answers with something we can't use."""

    def __init__(self, error: str, raw_response: str | None = None):
        super().__init__(error, status_code=502)
        self.message = "AI service returned an invalid response"
        self.code = "UPSTREAM_BAD_RESPONSE"
        if raw_response is not None:
            self.details["raw_response"] = raw_response[:500]


# =============================================================================
# Exception Handlers
# =============================================================================

def _recognized_status(exc: Exception) -> int | None:
    """Return the exception's status_code if it is a usable HTTP error code."""
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int) and not isinstance(status_code, bool) and 400 <= status_code <= 599:
        return status_code
    return None


def error_to_response(exc: Exception) -> JSONResponse:
    """
    Normalize any exception into an envelope response.

    - Exceptions carrying a recognized status_code keep it and their message.
    - Everything else is an unclassified fault: 500 with a generic message.
    """
    status_code = _recognized_status(exc)

    if status_code is None:
        logger.error(f"Unhandled error: {exc!r}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_envelope(GENERIC_ERROR_MESSAGE),
        )

    if status_code >= 500:
        logger.error(f"{exc} details={getattr(exc, 'details', {})}")
    else:
        logger.warning(f"{status_code}: {exc}")

    message = getattr(exc, "message", None) or getattr(exc, "detail", None) or str(exc)
    headers = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=status_code,
        content=error_envelope(str(message)),
        headers=headers,
    )


async def interviewprep_exception_handler(
    request: Request,
    exc: InterviewPrepException,
) -> JSONResponse:
    """Convert InterviewPrepException to an envelope response."""
    return error_to_response(exc)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Unknown routes, wrong methods and explicit HTTPExceptions."""
    return error_to_response(exc)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle request body / query validation errors.

    Converts pydantic's error list into one readable message.
    """
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))

    logger.warning(f"Validation failed on {request.method} {request.url.path}: {problems}")
    return JSONResponse(
        status_code=422,
        content=error_envelope(f"Validation error: {'; '.join(problems)}"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything no other handler claimed."""
    return error_to_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the terminal error handlers on the app.

    This is the only place errors turn into responses.
    """
    app.add_exception_handler(InterviewPrepException, interviewprep_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
