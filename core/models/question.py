# =============================================================================
# core/models/question.py - Question Schemas
# =============================================================================
# These models define the API contract for question operations:
# - QuestionAnswer: A question/answer pair (input, and AI output)
# - QuestionAddRequest: Input for adding questions to a session
# - QuestionNoteUpdate: Input for replacing a question's note
# - QuestionResponse: Output when returning a stored question
#
# Questions always belong to exactly one interview session.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class QuestionAnswer(BaseModel):
    """
    A single interview question with its model answer.

    Example:
        {
            "question": "What is a closure in JavaScript?",
            "answer": "A closure is a function bundled with its lexical scope..."
        }
    """

    question: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="The interview question"
    )

    answer: str = Field(
        default="",
        max_length=20000,
        description="Model answer (markdown allowed)"
    )


class QuestionAddRequest(BaseModel):
    """Request to append questions to an existing session."""

    session_id: UUID = Field(..., description="Session to add the questions to")

    questions: list[QuestionAnswer] = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Questions to add"
    )


class QuestionNoteUpdate(BaseModel):
    """Request to replace a question's personal note."""

    note: str = Field(
        default="",
        max_length=5000,
        description="Free-form note (empty string clears it)"
    )


class QuestionResponse(BaseModel):
    """
    Schema for returning a stored question to clients.

    Example:
        {
            "id": "770e8400-e29b-41d4-a716-446655440002",
            "session_id": "550e8400-e29b-41d4-a716-446655440000",
            "question": "Explain the event loop",
            "answer": "...",
            "note": "",
            "is_pinned": false,
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    session_id: UUID
    question: str
    answer: str = ""
    note: str = ""
    is_pinned: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
