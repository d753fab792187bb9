"""
PWAcommerce Backend - Request ID Middleware
=============================================

What:  Assigns every request a correlation id and returns it in the
       X-Request-ID response header.
How:   A client-supplied X-Request-ID is reused (the web app can tie its own
       error reports to server logs); otherwise an 8-character id is made
       from a uuid4. The id is kept in a ContextVar for loggers and error
       handlers, and in request.state for route handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop never share a value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Longer client ids are cut so a hostile header cannot flood the logs
MAX_REQUEST_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get("X-Request-ID", "").strip()
        rid = supplied[:MAX_REQUEST_ID_LENGTH] if supplied else uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
