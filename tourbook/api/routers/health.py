"""
Health check endpoints for monitoring and orchestration.

- /health: basic liveness check (always 200)
- /health/live: alias of /health
- /health/ready: readiness check (database reachable when SQL storage is on)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from tourbook.api.deps import AsyncSessionLocal
from tourbook.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "tour-bookings-api"


@router.get("/health")
async def health_check():
    """Liveness probe. Returns 200 while the process is running."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/live")
async def health_check_live():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/ready")
async def health_check_ready(settings: Settings = Depends(get_settings)):
    """
    Readiness probe.

    With in-memory storage there is nothing external to check. Otherwise
    runs a trivial query and returns 503 when the database is unreachable.
    """
    health_status = {"status": "ready", "checks": {}}

    if settings.use_in_memory:
        health_status["checks"]["database"] = "in_memory"
        return health_status

    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar()
        health_status["checks"]["database"] = "healthy"
    except Exception as e:
        logger.error("Readiness check: Database unhealthy", exc_info=e)
        health_status["status"] = "not_ready"
        health_status["checks"]["database"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    return health_status
