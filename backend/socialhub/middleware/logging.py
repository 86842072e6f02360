"""
SocialHub Backend — Request Logging Middleware
===============================================

What:  One structured log line per HTTP request.
How:   Measures the time spent in the inner layers and logs method, path,
       status, duration, request ID and client IP on the "socialhub.access"
       logger. The level follows the status class (5xx ERROR, 4xx WARNING,
       otherwise INFO; /health polls stay at DEBUG). The matched route
       template goes into the record extras for grouping.

Privacy:
    Logged:     method, path, status, duration, IP, request ID, caller username
    Not logged: request/response bodies (passwords), the Authorization header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from socialhub.middleware.request_id import request_id_var


logger = logging.getLogger("socialhub.access")

# Probe endpoints polled by load balancers; kept at DEBUG
QUIET_PATHS = {"/health"}


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    """Matched path template, e.g. /api/posts/{post_id} for /api/posts/17."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        path = request.url.path
        status = response.status_code
        identity = getattr(request.state, "identity", None)
        caller = identity.username if identity is not None else "anonymous"
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        level = logging.DEBUG if path in QUIET_PATHS else _level_for(status)
        logger.log(
            level,
            "%s %s %d %.1fms [%s] %s from %s",
            request.method,
            path,
            status,
            elapsed_ms,
            rid,
            caller,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": _route_template(request),
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
                "caller_id": identity.id if identity is not None else None,
            },
        )
        return response
