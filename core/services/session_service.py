# =============================================================================
# core/services/session_service.py - Session Business Logic
# =============================================================================
# Handles interview session CRUD operations and ownership checks.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import DatabaseError, SessionNotFoundError
from core.models.question import QuestionAnswer
from core.models.session import SessionCreate
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid, utc_now_iso

logger = logging.getLogger(__name__)

SESSIONS_TABLE = "sessions"
QUESTIONS_TABLE = "questions"


class SessionService:
    """
    Service for interview session operations.

    Provides a clean interface between API routes and database.
    """

    def __init__(self, db: SupabaseClient):
        self.db = db

    def _execute(self, query, operation: str) -> list[dict[str, Any]]:
        try:
            return self.db.execute(query, operation=operation)
        except SupabaseClientError as e:
            logger.error(f"Failed to {operation}: {e}")
            raise DatabaseError(str(e)) from e

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_session(
        self,
        user_id: UUID | str,
        request: SessionCreate,
    ) -> dict[str, Any]:
        """
        Create a new session, storing any initial questions with it.

        Args:
            user_id: The user ID who owns this session
            request: Role, experience, topics and optional questions

        Returns:
            Created session dict including its questions
        """
        now = utc_now_iso()
        data = {
            "user_id": normalize_uuid(user_id),
            "role": request.role.strip(),
            "experience": request.experience.strip(),
            "topics_to_focus": request.topics_to_focus.strip(),
            "description": request.description.strip(),
            "created_at": now,
            "updated_at": now,
        }

        rows = self._execute(self.db.table(SESSIONS_TABLE).insert(data), "create session")
        if not rows:
            raise DatabaseError("Insert returned no data")

        session = rows[0]
        logger.info(f"Created session: {session['id']} for user: {user_id}")

        try:
            session["questions"] = self.insert_questions(session["id"], request.questions)
        except DatabaseError:
            # No half-written sessions: a client retry would otherwise duplicate it
            logger.warning(f"Removing session {session['id']} after failed question insert")
            self._execute(
                self.db.table(SESSIONS_TABLE).delete().eq("id", str(session["id"])),
                "remove incomplete session",
            )
            raise

        session["question_count"] = len(session["questions"])
        return session

    def insert_questions(
        self,
        session_id: UUID | str,
        questions: list[QuestionAnswer],
    ) -> list[dict[str, Any]]:
        """
        Insert question rows for a session.

        Ownership is NOT checked here; callers verify the session first.
        """
        if not questions:
            return []

        now = utc_now_iso()
        session_id_str = normalize_uuid(session_id)
        rows = [
            {
                "session_id": session_id_str,
                "question": qa.question.strip(),
                "answer": qa.answer,
                "note": "",
                "is_pinned": False,
                "created_at": now,
                "updated_at": now,
            }
            for qa in questions
        ]

        inserted = self._execute(self.db.table(QUESTIONS_TABLE).insert(rows), "insert questions")

        self._execute(
            self.db.table(SESSIONS_TABLE).update({"updated_at": now}).eq("id", session_id_str),
            "touch session",
        )

        logger.info(f"Added {len(inserted)} questions to session {session_id_str}")
        return inserted

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def get_session(
        self,
        session_id: UUID | str,
        user_id: UUID | str | None = None,
    ) -> dict[str, Any]:
        """
        Get a session by ID.

        Args:
            session_id: The session UUID
            user_id: If provided, verify the session belongs to this user

        Returns:
            Session dict (without questions)

        Raises:
            SessionNotFoundError: If session doesn't exist or user doesn't own it
        """
        session_id_str = normalize_uuid(session_id)
        rows = self._execute(
            self.db.table(SESSIONS_TABLE).select("*").eq("id", session_id_str).limit(1),
            "fetch session",
        )

        if not rows:
            raise SessionNotFoundError(session_id_str)

        session = rows[0]

        # Don't reveal that someone else's session exists - return not found
        if user_id and str(session.get("user_id")) != str(user_id):
            raise SessionNotFoundError(session_id_str)

        return session

    def get_session_with_questions(
        self,
        session_id: UUID | str,
        user_id: UUID | str | None = None,
    ) -> dict[str, Any]:
        """
        Get a session with its questions, pinned first then oldest first.

        Raises:
            SessionNotFoundError: If session doesn't exist or user doesn't own it
        """
        session = self.get_session(session_id, user_id=user_id)

        questions = self._execute(
            self.db.table(QUESTIONS_TABLE)
            .select("*")
            .eq("session_id", str(session["id"]))
            .order("is_pinned", desc=True)
            .order("created_at"),
            "fetch session questions",
        )

        session["questions"] = questions
        session["question_count"] = len(questions)
        return session

    def list_sessions(self, user_id: UUID | str) -> tuple[list[dict[str, Any]], int]:
        """
        List a user's sessions, newest first.

        Each session carries question_count from an embedded count.

        Returns:
            Tuple of (sessions list, total count)
        """
        rows = self._execute(
            self.db.table(SESSIONS_TABLE)
            .select("*, questions(count)")
            .eq("user_id", normalize_uuid(user_id))
            .order("created_at", desc=True),
            "list sessions",
        )

        sessions = []
        for row in rows:
            embedded = row.pop("questions", None) or [{}]
            row["question_count"] = embedded[0].get("count", 0) if isinstance(embedded, list) else 0
            sessions.append(row)

        return sessions, len(sessions)

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def delete_session(
        self,
        session_id: UUID | str,
        user_id: UUID | str | None = None,
    ) -> dict[str, Any]:
        """
        Delete a session and all of its questions.

        Returns:
            The deleted session dict

        Raises:
            SessionNotFoundError: If session doesn't exist or user doesn't own it
        """
        session = self.get_session(session_id, user_id=user_id)
        session_id_str = str(session["id"])

        self._execute(
            self.db.table(QUESTIONS_TABLE).delete().eq("session_id", session_id_str),
            "delete session questions",
        )
        self._execute(
            self.db.table(SESSIONS_TABLE).delete().eq("id", session_id_str),
            "delete session",
        )

        logger.info(f"Deleted session: {session_id_str}")
        return session
