"""Health & Readiness Probes — liveness, readiness, and sweep status.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - Sweep status is reported, never used to fail readiness: expiration is
      best-effort within one interval
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from sharehub.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "sharehub-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — database connectivity plus expiration sweep state."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    scheduler = getattr(request.app.state, "sweep_scheduler", None)
    sweep = {
        "state": scheduler.state.value if scheduler else "disabled",
        "ticks_completed": scheduler.ticks_completed if scheduler else 0,
    }
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "sweep": sweep,
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}, "sweep": sweep}
