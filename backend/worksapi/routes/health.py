"""
Works API - Health Check Route
===============================

What:  GET /health for monitoring and container health checks.
How:   Pings the database handle with SELECT 1 and reports uptime.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (or not yet connected)
"""

import logging
import time

from fastapi import APIRouter, Request

from worksapi import __version__
from worksapi.schemas.work import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    database = getattr(request.app.state, "database", None)
    connected = database is not None and await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
