"""
SoulFinder Backend: Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Measures wall time around the downstream app and logs method, path,
       status, duration, request id, client IP and, on bearer-guarded routes,
       the verified caller's uid on `soulfinder.access`.
       The level follows the status: 5xx → ERROR, 4xx → WARNING, else INFO.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID, caller uid
    ❌ Don't log: request bodies (profiles hold personal data),
       the Authorization header, the caller's email
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from soulfinder.middleware.request_id import request_id_var

logger = logging.getLogger("soulfinder.access")

QUIET_PATHS = {"/health", "/"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        # Set by security.verify_token; absent on open routes and on 401s
        identity = getattr(request.state, "identity", None)
        uid = identity.uid if identity is not None else "-"
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s uid=%s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            uid,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "uid": uid,
            },
        )
        return response
