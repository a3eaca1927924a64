"""
Exercise Tracker: Request ID Middleware
=========================================

What:  Gives every request a correlation id and echoes it in X-Request-ID.
How:   A client-supplied X-Request-ID is reused when it is short and made of
       safe characters; anything else is replaced by the first 8 characters
       of a fresh UUID, so log lines never carry attacker-chosen text.
       The id lives in a ContextVar; RequestIdLogFilter copies it onto every
       log record emitted while the request is handled.

Example:
    curl -H "X-Request-ID: checkout-42" localhost:3000/api/users
    → X-Request-ID: checkout-42, and every log line of that request shows
      [checkout-42]
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

# Empty outside a request (startup, shutdown, background work)
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(candidate: Optional[str]) -> str:
    """Reuse a well-formed client id, otherwise mint a short one."""
    if candidate and _VALID_REQUEST_ID.match(candidate):
        return candidate
    return uuid.uuid4().hex[:8]


class RequestIdLogFilter(logging.Filter):
    """Adds `record.request_id` ("-" outside a request) for the log format."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns request ids; see module docstring."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[HEADER] = rid
        return response
