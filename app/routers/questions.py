# =============================================================================
# app/routers/questions.py - Question Endpoints
# =============================================================================
# Add questions to a session, pin/unpin them, and edit personal notes.
# All endpoints require authentication and ownership of the parent session.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status

from app.auth import CurrentUser
from app.dependencies import QuestionServiceDep
from core.models.envelope import Envelope, success_envelope
from core.models.question import QuestionAddRequest, QuestionNoteUpdate, QuestionResponse

router = APIRouter()


@router.post(
    "/add",
    response_model=Envelope[list[QuestionResponse]],
    status_code=status.HTTP_201_CREATED,
)
def add_questions_to_session(
    user: CurrentUser,
    body: QuestionAddRequest,
    questions: QuestionServiceDep,
):
    """Append questions to one of the user's sessions."""
    added = questions.add_questions(body.session_id, body.questions, user_id=user.id)
    return success_envelope(
        [QuestionResponse.model_validate(row) for row in added],
        message=f"Added {len(added)} questions",
    )


@router.post("/{question_id}/pin", response_model=Envelope[QuestionResponse])
def toggle_pin_question(
    user: CurrentUser,
    question_id: Annotated[UUID, Path(description="Question UUID")],
    questions: QuestionServiceDep,
):
    """Pin or unpin a question. Pinned questions are listed first."""
    question = questions.toggle_pin(question_id, user_id=user.id)
    return success_envelope(QuestionResponse.model_validate(question))


@router.post("/{question_id}/note", response_model=Envelope[QuestionResponse])
def update_question_note(
    user: CurrentUser,
    question_id: Annotated[UUID, Path(description="Question UUID")],
    body: QuestionNoteUpdate,
    questions: QuestionServiceDep,
):
    """Replace the note on a question."""
    question = questions.update_note(question_id, body.note, user_id=user.id)
    return success_envelope(QuestionResponse.model_validate(question))
