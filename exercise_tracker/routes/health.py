"""
Exercise Tracker: Health Check Route
======================================

What:  GET /health for container probes and monitoring.
How:   Pings the store with SELECT 1 through the app's Database handle.
       Always answers 200; the body says whether the store is reachable.
"""

import time

from fastapi import APIRouter, Request

from exercise_tracker import __version__
from exercise_tracker.schemas.user import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request) -> HealthResponse:
    connected = await request.app.state.database.ping()
    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
