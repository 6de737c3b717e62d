"""
SoulFinder Backend: Request Timeout Middleware
=================================================

What:  Upper bound on the time a single request may take.
How:   Runs the downstream app under asyncio.wait_for. On expiry the
       handler task is cancelled, which cancels whatever store or provider
       call it is awaiting, and the client receives a 504 JSON error.

Thread-pool calls (Firebase verification, Stripe) cannot be interrupted;
their result is discarded when they finish after the deadline.
"""

import asyncio
import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from soulfinder.exceptions import RequestTimeoutError
from soulfinder.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, timeout_seconds: float = 30.0, **kwargs):
        super().__init__(app, **kwargs)
        self.timeout_seconds = timeout_seconds

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            exc = RequestTimeoutError(timeout=self.timeout_seconds)
            rid = request_id_var.get("")
            logger.error(
                "[%s] %s %s timed out after %ss",
                rid,
                request.method,
                request.url.path,
                self.timeout_seconds,
            )
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "error": exc.error_code,
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": rid,
                },
            )
