# =============================================================================
# app/routers/sessions.py - Interview Session CRUD Endpoints
# =============================================================================
# Handles session creation, listing, retrieval and deletion.
# All endpoints require authentication; users only ever see their own
# sessions (someone else's session answers 404).
#
# Handlers are plain functions: the Supabase client is synchronous, so
# FastAPI runs them in its threadpool instead of on the event loop.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status

from app.auth import CurrentUser
from app.dependencies import SessionServiceDep
from core.models.envelope import Envelope, success_envelope
from core.models.session import SessionCreate, SessionList, SessionResponse, SessionSummary

router = APIRouter()


@router.post(
    "",
    response_model=Envelope[SessionResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_session(
    user: CurrentUser,
    body: SessionCreate,
    sessions: SessionServiceDep,
):
    """
    Create a new interview session.

    Questions passed in the body (typically from
    POST /api/ai/generate-questions) are stored with the session.
    """
    session = sessions.create_session(user_id=user.id, request=body)
    return success_envelope(
        SessionResponse.model_validate(session),
        message="Session created successfully",
    )


@router.get("", response_model=Envelope[SessionList])
def list_sessions(
    user: CurrentUser,
    sessions: SessionServiceDep,
):
    """
    List the authenticated user's sessions, newest first.
    """
    rows, total = sessions.list_sessions(user_id=user.id)
    return success_envelope(
        SessionList(
            sessions=[SessionSummary.model_validate(row) for row in rows],
            total=total,
        )
    )


@router.get("/{session_id}", response_model=Envelope[SessionResponse])
def get_session(
    user: CurrentUser,
    session_id: Annotated[UUID, Path(description="Session UUID")],
    sessions: SessionServiceDep,
):
    """
    Get a session with its questions (pinned questions first).

    User must own the session.
    """
    session = sessions.get_session_with_questions(session_id, user_id=user.id)
    return success_envelope(SessionResponse.model_validate(session))


@router.delete("/{session_id}", response_model=Envelope[dict])
def delete_session(
    user: CurrentUser,
    session_id: Annotated[UUID, Path(description="Session UUID")],
    sessions: SessionServiceDep,
):
    """
    Delete a session and all of its questions.

    User must own the session.
    """
    session = sessions.delete_session(session_id, user_id=user.id)
    return success_envelope(
        {"session_id": str(session["id"])},
        message="Session deleted successfully",
    )
