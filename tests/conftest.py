# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds a test app with services replaced by mocks (no Supabase, no OpenAI)
# - Issues real tokens signed with the test secret
# =============================================================================

import os
from uuid import UUID

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds the module-level app (and reads settings) on import

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from agents.interview_coach import InterviewCoach
from app.auth.tokens import create_access_token
from app.config import Settings
from app.dependencies import (
    get_interview_coach,
    get_question_service,
    get_session_service,
    get_user_service,
)
from app.main import create_app
from core.services import QuestionService, SessionService, UserService

TEST_USER_ID = UUID("11111111-1111-4111-8111-111111111111")
OTHER_USER_ID = UUID("22222222-2222-4222-8222-222222222222")
TEST_SESSION_ID = "33333333-3333-4333-8333-333333333333"
TEST_QUESTION_ID = "44444444-4444-4444-8444-444444444444"
TEST_EMAIL = "candidate@example.com"
FRONTEND_ORIGIN = "http://localhost:5173"


# =============================================================================
# Settings and Tokens
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings built explicitly, ignoring any .env file."""
    return Settings(
        _env_file=None,
        SUPABASE_URL="https://test-project.supabase.co",
        SUPABASE_SERVICE_KEY="test-service-key",
        OPENAI_API_KEY="test-openai-key",
        JWT_SECRET="test-jwt-secret-0123456789",
        FRONTEND_URL=FRONTEND_ORIGIN,
        ENVIRONMENT="development",
        DB_CONNECT_ATTEMPTS=3,
        DB_CONNECT_BACKOFF_SECONDS=0,
    )


@pytest.fixture
def token(settings) -> str:
    """A valid access token for TEST_USER_ID."""
    return create_access_token(TEST_USER_ID, TEST_EMAIL, settings)


@pytest.fixture
def auth_headers(token) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Mocked Collaborators
# =============================================================================

@pytest.fixture
def mock_users():
    return MagicMock(spec=UserService)


@pytest.fixture
def mock_sessions():
    return MagicMock(spec=SessionService)


@pytest.fixture
def mock_questions():
    return MagicMock(spec=QuestionService)


@pytest.fixture
def mock_coach():
    coach = MagicMock(spec=InterviewCoach)
    coach.generate_questions = AsyncMock()
    coach.explain_concept = AsyncMock()
    return coach


# =============================================================================
# App and Client
# =============================================================================

@pytest.fixture
def test_app(settings, mock_users, mock_sessions, mock_questions, mock_coach):
    """
    The real app with every service replaced by a mock.

    The lifespan is not run (the client is not used as a context manager),
    so no database connection is attempted.
    """
    app = create_app(settings)
    app.dependency_overrides[get_user_service] = lambda: mock_users
    app.dependency_overrides[get_session_service] = lambda: mock_sessions
    app.dependency_overrides[get_question_service] = lambda: mock_questions
    app.dependency_overrides[get_interview_coach] = lambda: mock_coach
    return app


@pytest.fixture
def client(test_app) -> TestClient:
    return TestClient(test_app, raise_server_exceptions=False)


# =============================================================================
# Sample Rows
# =============================================================================

@pytest.fixture
def sample_user_row():
    """A users row as Supabase returns it."""
    return {
        "id": str(TEST_USER_ID),
        "name": "Casey Candidate",
        "email": TEST_EMAIL,
        "password_hash": "$argon2id$v=19$m=65536,t=2,p=2$c2FsdA$aGFzaA",
        "profile_image_url": None,
        "created_at": "2024-01-15T10:00:00+00:00",
        "updated_at": "2024-01-15T10:00:00+00:00",
    }


@pytest.fixture
def sample_question_row():
    """A questions row as Supabase returns it."""
    return {
        "id": TEST_QUESTION_ID,
        "session_id": TEST_SESSION_ID,
        "question": "What is the event loop?",
        "answer": "It schedules callbacks and I/O completions...",
        "note": "",
        "is_pinned": False,
        "created_at": "2024-01-15T10:30:00+00:00",
        "updated_at": "2024-01-15T10:30:00+00:00",
    }


@pytest.fixture
def sample_session_row():
    """A sessions row as Supabase returns it."""
    return {
        "id": TEST_SESSION_ID,
        "user_id": str(TEST_USER_ID),
        "role": "Backend Engineer",
        "experience": "3 years",
        "topics_to_focus": "Python, asyncio, PostgreSQL",
        "description": "Prep for onsite",
        "created_at": "2024-01-15T10:00:00+00:00",
        "updated_at": "2024-01-15T10:30:00+00:00",
    }
