"""
Works API - Unhandled Error Middleware
=======================================

What:  Turns any exception the works handlers did not map into a 500
       `{"message": "An unexpected error occurred"}` response.
How:   Added first, so it sits innermost: the response it builds still
       passes back through RequestLoggingMiddleware (access line at ERROR)
       and RequestIDMiddleware (X-Request-ID header).
When:  A bug in a handler, a store call on a Database that was never
       connected, anything that is not a WorksAPIError or a request
       validation error (those have exception handlers in main.py).
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from worksapi.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Last-resort 500 for exceptions with no registered handler."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            rid = request_id_var.get("")
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={"message": "An unexpected error occurred"},
            )
