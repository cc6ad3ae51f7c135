# =============================================================================
# core/services/question_service.py - Question Business Logic
# =============================================================================
# Adds questions to sessions, pins them and edits notes.
# Ownership is checked through the parent session.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import DatabaseError, QuestionNotFoundError, SessionNotFoundError
from core.models.question import QuestionAnswer
from core.services.session_service import QUESTIONS_TABLE, SessionService
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid, utc_now_iso

logger = logging.getLogger(__name__)


class QuestionService:
    """Service for question operations."""

    def __init__(self, db: SupabaseClient, sessions: SessionService | None = None):
        self.db = db
        self.sessions = sessions or SessionService(db)

    def add_questions(
        self,
        session_id: UUID | str,
        questions: list[QuestionAnswer],
        user_id: UUID | str,
    ) -> list[dict[str, Any]]:
        """
        Append questions to a session the user owns.

        Raises:
            SessionNotFoundError: If session doesn't exist or user doesn't own it
        """
        session = self.sessions.get_session(session_id, user_id=user_id)
        return self.sessions.insert_questions(session["id"], questions)

    def get_question(
        self,
        question_id: UUID | str,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """
        Get a question the user owns (via its session).

        Raises:
            QuestionNotFoundError: If the question doesn't exist or isn't the user's
        """
        question_id_str = normalize_uuid(question_id)

        try:
            question = self.db.execute_one(
                self.db.table(QUESTIONS_TABLE).select("*").eq("id", question_id_str).limit(1),
                operation="fetch question",
            )
        except SupabaseClientError as e:
            raise DatabaseError(str(e)) from e

        if not question:
            raise QuestionNotFoundError(question_id_str)

        try:
            self.sessions.get_session(question["session_id"], user_id=user_id)
        except SessionNotFoundError:
            raise QuestionNotFoundError(question_id_str)

        return question

    def _update(self, question_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        changes = {**changes, "updated_at": utc_now_iso()}
        try:
            updated = self.db.execute_one(
                self.db.table(QUESTIONS_TABLE).update(changes).eq("id", question_id),
                operation="update question",
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to update question {question_id}: {e}")
            raise DatabaseError(str(e)) from e

        if not updated:
            raise QuestionNotFoundError(question_id)
        return updated

    def toggle_pin(self, question_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """Flip is_pinned on a question and return the updated row."""
        question = self.get_question(question_id, user_id)
        pinned = not bool(question.get("is_pinned"))

        updated = self._update(str(question["id"]), {"is_pinned": pinned})
        logger.info(f"Question {question['id']} pinned={pinned}")
        return updated

    def update_note(
        self,
        question_id: UUID | str,
        note: str,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """Replace a question's note and return the updated row."""
        question = self.get_question(question_id, user_id)
        return self._update(str(question["id"]), {"note": note})
