# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - envelope.py: The uniform {success, message, data} response wrapper
# - user.py: Registration, login and profile schemas
# - session.py: Interview session CRUD schemas
# - question.py: Question CRUD schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Envelope - every response uses it
# -----------------------------------------------------------------------------
from .envelope import Envelope, error_envelope, success_envelope

# -----------------------------------------------------------------------------
# User Models - accounts
# -----------------------------------------------------------------------------
from .user import (
    AuthResult,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)

# -----------------------------------------------------------------------------
# Question Models
# -----------------------------------------------------------------------------
from .question import (
    QuestionAddRequest,
    QuestionAnswer,
    QuestionNoteUpdate,
    QuestionResponse,
)

# -----------------------------------------------------------------------------
# Session Models - interview preparation tracks
# -----------------------------------------------------------------------------
from .session import (
    SessionCreate,
    SessionList,
    SessionResponse,
    SessionSummary,
)

__all__ = [
    # Envelope
    "Envelope",
    "error_envelope",
    "success_envelope",
    # User
    "AuthResult",
    "LoginRequest",
    "RegisterRequest",
    "UserResponse",
    # Question
    "QuestionAddRequest",
    "QuestionAnswer",
    "QuestionNoteUpdate",
    "QuestionResponse",
    # Session
    "SessionCreate",
    "SessionList",
    "SessionResponse",
    "SessionSummary",
]
