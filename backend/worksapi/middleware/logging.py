"""
Works API - Request Logging Middleware
=======================================

What:  Writes one access line per request on the `worksapi.access` logger,
       e.g. `POST /api/works 200 4.2ms [a1b2c3d4] from 127.0.0.1`.
How:   Times the downstream call and picks the level from the status:
       a failed create/update/delete (500) logs at ERROR, a PUT or DELETE
       on a missing work (404) at WARNING, everything else at INFO.
When:  Inside RequestIDMiddleware (the id is already set) and outside
       UnhandledErrorMiddleware (unexpected errors show up as 500 lines).

Work titles and descriptions are user content and are never logged; only
method, path, status, duration, request id and client address are. The
same fields go into `extra` for handlers that emit structured records.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from worksapi.middleware.request_id import request_id_var

logger = logging.getLogger("worksapi.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the works API; /health checks are not logged."""

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
