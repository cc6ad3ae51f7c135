# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .password_service import PasswordService
from .question_service import QuestionService
from .session_service import SessionService
from .user_service import UserService

__all__ = [
    "PasswordService",
    "QuestionService",
    "SessionService",
    "UserService",
]
