# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Everything here reads from app.state, which create_app() and the lifespan
# handler populate. Tests replace these via app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from agents.interview_coach import InterviewCoach
from app.config import Settings
from app.exceptions import DatabaseError
from core.services import QuestionService, SessionService, UserService
from lib.supabase_client import SupabaseClient


def get_app_settings(request: Request) -> Settings:
    """Return the settings the app was created with."""
    return request.app.state.settings


def get_db(request: Request) -> SupabaseClient:
    """
    Get the connected Supabase client.

    Raises:
        DatabaseError: If startup hasn't connected the database
    """
    db = getattr(request.app.state, "db", None)
    if db is None or not db.is_connected:
        raise DatabaseError("Database client not initialized")
    return db


def get_user_service(db: Annotated[SupabaseClient, Depends(get_db)]) -> UserService:
    return UserService(db)


def get_session_service(db: Annotated[SupabaseClient, Depends(get_db)]) -> SessionService:
    return SessionService(db)


def get_question_service(db: Annotated[SupabaseClient, Depends(get_db)]) -> QuestionService:
    return QuestionService(db)


def get_interview_coach(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> InterviewCoach:
    """
    Get the app's InterviewCoach, creating it on first use.

    One instance per app so the OpenAI connection pool is shared.
    """
    coach = getattr(request.app.state, "coach", None)
    if coach is None:
        coach = InterviewCoach(settings)
        request.app.state.coach = coach
    return coach


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]
QuestionServiceDep = Annotated[QuestionService, Depends(get_question_service)]
InterviewCoachDep = Annotated[InterviewCoach, Depends(get_interview_coach)]
