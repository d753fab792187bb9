"""
PWAcommerce Backend - Health Check Route
==========================================

What:  Liveness/readiness probe for Docker and load balancers.
How:   Runs SELECT 1 against the database and checks that the store
       credentials are configured. The store itself is not called; a probe
       every few seconds should not spend the store's API budget.

Status levels:
    healthy    database reachable and credentials configured
    degraded   credentials missing (commerce endpoints answer 404)
    unhealthy  database unreachable
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from pwacommerce import __version__
from pwacommerce.database import async_session_factory
from pwacommerce.schemas.store import HealthResponse
from pwacommerce.services.options_service import options_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    credentials = "unknown"
    overall = "healthy"

    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
            options = await options_service.load(session)
        credentials = "configured" if options.has_credentials else "missing"
        if not options.has_credentials:
            overall = "degraded"
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        credentials=credentials,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
