# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from lib.database import DatabaseClient

router = APIRouter()

# Process start, used for uptime reporting
_STARTED_AT = time.monotonic()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    uptime: float


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns process status and uptime in seconds. Does not touch the database.
    """
    return HealthResponse(
        status="OK",
        timestamp=_now_iso(),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check():
    """
    Readiness check endpoint.

    Checks database connectivity. Declared sync so the blocking driver call
    runs in the threadpool.
    """
    database_ok = DatabaseClient.ping()

    return ReadinessResponse(
        status="ready" if database_ok else "degraded",
        checks=ChecksResponse(database="healthy" if database_ok else "unhealthy"),
        timestamp=_now_iso(),
    )
