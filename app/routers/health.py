# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Unauthenticated probes for load balancers and container orchestrators:
# - /api/health        static "is the process up" answer with version info
# - /api/health/live   liveness (never touches dependencies)
# - /api/health/ready  readiness (runs a one-row select against the database)
# =============================================================================

from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel

from app import API_VERSION
from app.dependencies import SettingsDep
from core.models.envelope import Envelope, success_envelope

router = APIRouter()


class HealthInfo(BaseModel):
    status: Literal["healthy"]
    environment: str
    version: str
    timestamp: str


class DependencyChecks(BaseModel):
    """Result per dependency: "healthy" or "unhealthy: <reason>"."""
    database: str


class ReadinessInfo(BaseModel):
    status: Literal["ready", "degraded"]
    checks: DependencyChecks
    timestamp: str


class LivenessInfo(BaseModel):
    status: Literal["alive"]
    timestamp: str


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _database_check(request: Request) -> str:
    db = getattr(request.app.state, "db", None)
    if db is None or not db.is_connected:
        return "unhealthy: not connected"
    return "healthy" if db.ping() else "unhealthy: ping failed"


@router.get("/health", response_model=Envelope[HealthInfo])
async def health_check(settings: SettingsDep):
    """Static health answer; does not check dependencies."""
    return success_envelope(
        HealthInfo(
            status="healthy",
            environment=settings.ENVIRONMENT,
            version=API_VERSION,
            timestamp=_timestamp(),
        )
    )


@router.get("/health/ready", response_model=Envelope[ReadinessInfo])
def readiness_check(request: Request):
    """
    Ready when the database answers a probe query.

    Always 200; "degraded" tells the balancer to stop routing here.
    """
    database = _database_check(request)
    return success_envelope(
        ReadinessInfo(
            status="ready" if database == "healthy" else "degraded",
            checks=DependencyChecks(database=database),
            timestamp=_timestamp(),
        )
    )


@router.get("/health/live", response_model=Envelope[LivenessInfo])
async def liveness_check():
    return success_envelope(LivenessInfo(status="alive", timestamp=_timestamp()))
