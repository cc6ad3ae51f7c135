# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the InterviewPrep API.
# create_app() builds the application in a fixed order:
#   settings -> logging -> app + lifespan -> request pipeline
#   -> terminal error handlers -> routers
#
# The lifespan handler connects the database before the first request.
# If the connection can't be made after the configured retries, startup
# fails and the process exits.
#
# Usage:
#   uvicorn app.main:app --reload
#   interview-prep-api            (console script, binds HOST:PORT)
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from app import API_VERSION
from app.auth import routes as auth_routes
from app.config import Settings, get_settings
from app.exceptions import register_exception_handlers
from app.middleware import install_pipeline
from app.routers import ai, health, questions, sessions
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

API_TITLE = "InterviewPrep API"


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    # The SDKs log every HTTP call at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Connect the database (retries with backoff, fatal on failure)
    - Shutdown: Close the AI client and drop the database client
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {API_TITLE} in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    db = SupabaseClient(settings)
    await run_in_threadpool(db.connect)
    app.state.db = db

    yield

    # Shutdown
    logger.info(f"Shutting down {API_TITLE}")

    coach = getattr(app.state, "coach", None)
    if coach is not None:
        await coach.aclose()

    db.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration to use (defaults to the cached environment settings)

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=API_TITLE,
        description="""
## AI-Assisted Interview Preparation API

Create interview sessions for a role, generate practice questions with
model answers, pin the ones that matter, and ask for deeper explanations.

### Authentication

`POST /api/auth/register` or `POST /api/auth/login` set an HttpOnly `token`
cookie and also return the token. Protected endpoints accept either the
cookie or an `Authorization: Bearer <token>` header.

### Responses

Every endpoint answers with `{"success": bool, "message": str, "data": ... | null}`.
""",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Register, log in, log out, current user"},
            {"name": "Sessions", "description": "Interview preparation sessions"},
            {"name": "Questions", "description": "Questions inside a session"},
            {"name": "AI", "description": "AI question generation and concept explanations"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )
    app.state.settings = settings

    # -------------------------------------------------------------------------
    # Middleware and Exception Handlers
    # -------------------------------------------------------------------------
    install_pipeline(app, settings)
    register_exception_handlers(app)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------
    app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(sessions.router, prefix="/api/sessions", tags=["Sessions"])
    app.include_router(questions.router, prefix="/api/questions", tags=["Questions"])
    app.include_router(ai.router, prefix="/api/ai", tags=["AI"])
    app.include_router(health.router, prefix="/api", tags=["Health"])

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "success": True,
            "message": "",
            "data": {
                "name": API_TITLE,
                "version": API_VERSION,
                "docs": "/docs",
                "health": "/api/health",
            },
        }

    return app


app = create_app()


def run() -> None:
    """Console-script entry point: serve the app on HOST:PORT."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG and settings.is_development,
    )


if __name__ == "__main__":
    run()
