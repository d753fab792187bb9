"""
PWAcommerce Backend - Request Logging Middleware
==================================================

What:  One access log line per request: method, path, status, duration,
       request id and client IP.
How:   The level follows the status: 5xx → ERROR, 4xx → WARNING, else INFO.
       The fields are also attached as `extra` so a JSON formatter can
       index them.

Not logged: request bodies (checkout payloads, uploaded icons) and
headers (X-Admin-Key).

Typical durations:
    GET  /pwacommerce/export-manifest    1-5ms (local only)
    GET  /pwacommerce/products           100-800ms (one or two store calls)
    POST /pwacommerce/proceed-checkout   10-50ms per item (database writes)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pwacommerce.middleware.request_id import request_id_var

logger = logging.getLogger("pwacommerce.access")

# Probes hit this every few seconds
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
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
