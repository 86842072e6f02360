"""
SocialHub Backend — Health Check Route
=======================================

What:  Liveness probe that also verifies database connectivity.
Who:   Docker health checks, load balancers, monitoring.

Status levels:
    healthy:    database answered SELECT 1
    unhealthy:  database unreachable (still HTTP 200 so the body is readable)
"""

import logging
import time

from fastapi import APIRouter, Request
from sqlalchemy import text

from socialhub import __version__
from socialhub.database import get_session_factory
from socialhub.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Set once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns service status, version, database connectivity and uptime.",
)
async def health_check(request: Request) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with get_session_factory(request)() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
