"""
Exercise Tracker: Request Logging Middleware
==============================================

What:  One access-log line per API request.
How:   Times the downstream call and reads back what the exception handlers
       recorded on request.state. Several failures of this API answer
       HTTP 200 with an {"error": ...} body ("User not found",
       "Failed to create user"), so the status alone would log them as
       successes; those lines are raised to WARNING and carry the message.

Levels:
    5xx                      ERROR
    4xx or body-level error  WARNING
    otherwise                INFO

Example lines:
    ... [INFO] exercise_tracker.access: POST /api/users 200 4.2ms from 127.0.0.1
    ... [WARNING] exercise_tracker.access: GET /api/users/42/logs 200 1.1ms from 127.0.0.1 error="User not found"

/health, the landing page and static assets are not logged. Request bodies
are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("exercise_tracker.access")

LOGGED_PREFIX = "/api/"


def access_log_level(status: int, body_error: bool) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400 or body_error:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging for the /api routes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if not path.startswith(LOGGED_PREFIX):
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # Set by the ExerciseTrackerError handler in main.py
        error = getattr(request.state, "error", None)
        route = request.scope.get("route")
        client_ip = request.client.host if request.client else "unknown"

        message = "%s %s %d %.1fms from %s"
        args = [request.method, path, response.status_code, duration_ms, client_ip]
        if error:
            message += ' error="%s"'
            args.append(error)

        logger.log(
            access_log_level(response.status_code, bool(error)),
            message,
            *args,
            extra={
                "method": request.method,
                "route": getattr(route, "path", path),
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "body_error": error,
            },
        )
        return response
