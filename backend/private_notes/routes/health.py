"""
Private Notes Backend — Health Check Route
===========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 against the database; the identity provider is not
       probed because it is only reachable with a user token.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response

from private_notes import __version__
from private_notes.database import check_database
from private_notes.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(response: Response) -> HealthResponse:
    database_ok = await check_database()
    if not database_ok:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if database_ok else "unhealthy",
        version=__version__,
        database="connected" if database_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
