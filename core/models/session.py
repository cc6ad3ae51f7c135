# =============================================================================
# core/models/session.py - Interview Session Schemas
# =============================================================================
# These models define the API contract for session operations:
# - SessionCreate: Input for creating a new interview session
# - SessionResponse: Output when returning a session to clients
# - SessionSummary / SessionList: Output for listing a user's sessions
#
# A session represents one interview-preparation track (a role plus the
# topics to practice). Questions are scoped to a session.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .question import QuestionAnswer, QuestionResponse


class SessionCreate(BaseModel):
    """
    Schema for creating a new session.

    Questions are optional: the frontend usually calls the AI endpoint first
    and passes the generated questions here.

    Example:
        {
            "role": "Frontend Developer",
            "experience": "2 years",
            "topics_to_focus": "React, TypeScript, accessibility",
            "description": "Prep for the ACME onsite",
            "questions": [{"question": "...", "answer": "..."}]
        }
    """

    role: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Job role being prepared for"
    )

    experience: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Candidate experience level (e.g. '3 years')"
    )

    topics_to_focus: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Comma-separated topics to practice"
    )

    description: str = Field(
        default="",
        max_length=2000,
        description="Optional free-form description"
    )

    questions: list[QuestionAnswer] = Field(
        default_factory=list,
        max_length=50,
        description="Initial questions to store with the session"
    )


class SessionSummary(BaseModel):
    """A session as shown in the list view."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    role: str
    experience: str
    topics_to_focus: str
    description: str = ""
    question_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SessionResponse(SessionSummary):
    """
    A single session with its questions.

    Questions are ordered pinned-first, then oldest-first.
    """

    user_id: UUID
    questions: list[QuestionResponse] = Field(default_factory=list)


class SessionList(BaseModel):
    """
    Schema for listing a user's sessions.

    Example:
        {
            "sessions": [...],
            "total": 3
        }
    """

    sessions: list[SessionSummary] = Field(
        default_factory=list,
        description="Sessions, newest first"
    )

    total: int = Field(
        default=0,
        ge=0,
        description="Total number of sessions"
    )
