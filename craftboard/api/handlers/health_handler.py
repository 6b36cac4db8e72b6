"""
Health Check Handler

Probes for monitoring and load balancers.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from craftboard.config.settings import settings
from craftboard.shared.db import ping_db
from craftboard.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready")
async def readiness_check():
    """
    Readiness check: the database must answer ``SELECT 1``.

    Returns:
        200 {"status": "ready"} or 503 {"status": "unavailable"}
    """
    if await ping_db():
        return {"status": "ready"}
    return JSONResponse(status_code=503, content={"status": "unavailable"})


@router.get("/live")
async def liveness_check():
    """Liveness check: the process is serving requests."""
    return {"status": "alive"}
