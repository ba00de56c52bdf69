"""
Commander Backend — Health Check Route
======================================

What:  Liveness endpoint with a database connectivity probe.
Who:   Docker health checks, load balancers, monitoring.

Status levels:
    - healthy:   the active repository can reach its store (HTTP 200)
    - unhealthy: the sql backend cannot reach the database (HTTP 503)

With the mock backend the database is not used and is reported as "unused".
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from commander import __version__
from commander.database import ping
from commander.schemas.command import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Runs SELECT 1 against the engine when the sql backend is active.
    """
    backend = request.app.state.repositories.backend
    db_status = "unused"
    overall = "healthy"

    if backend == "sql":
        if await ping(request.app.state.engine):
            db_status = "connected"
        else:
            db_status = "disconnected"
            overall = "unhealthy"
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        repository=backend,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
