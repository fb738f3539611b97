"""
DevConnector Backend - Access Log Middleware
============================================

What:  One access line per request, plus an `X-Response-Time` header.
How:   The line carries the matched route template (`/api/posts/{post_id}`)
       next to the concrete path, so logs group by endpoint rather than by
       post or profile id. Severity follows the status class.

Never logged: request bodies (passwords, profile text) and the
Authorization / x-auth-token headers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("devconnector.access")

# Probes hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for everything except health probes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"

        if request.url.path in QUIET_PATHS:
            return response

        endpoint = _route_template(request)
        logger.log(
            _level_for(response.status_code),
            "%s %s -> %d (%.1fms) [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            endpoint,
            extra={
                "endpoint": endpoint,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": request.client.host if request.client else None,
            },
        )
        return response
