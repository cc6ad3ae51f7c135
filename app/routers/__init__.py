# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - sessions.py: Interview session CRUD endpoints
# - questions.py: Question add / pin / note endpoints
# - ai.py: AI question generation and concept explanation
#
# Each router is mounted in main.py with a URL prefix.
# Auth routes live in app/auth/routes.py.
# =============================================================================

from . import ai
from . import health
from . import questions
from . import sessions

__all__ = [
    "ai",
    "health",
    "questions",
    "sessions",
]
