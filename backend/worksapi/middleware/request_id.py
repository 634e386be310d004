"""
Works API - Request ID Middleware
==================================

What:  Tags every request to the works service with a correlation id and
       returns it in the X-Request-ID response header.
How:   Reuses the caller's X-Request-ID when present, otherwise takes the
       first 8 hex characters of a UUID4. The id is stored in `request_id_var`
       so route handlers (e.g. the "unable to create new work" log line) and
       the exception handlers in main.py can prefix their log entries with it.
When:  Outermost middleware: it wraps the access log and the unhandled-error
       layer, so 200, 404 and 500 responses all carry the header.

Example:
    $ curl -i -H 'X-Request-ID: abc123' localhost:8080/api/works
    HTTP/1.1 200 OK
    x-request-id: abc123
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns the request id before any work handler runs.

    The id is also put on `request.state.request_id` for code that has the
    Request object rather than the context.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
