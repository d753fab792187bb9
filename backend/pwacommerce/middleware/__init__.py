# Middleware package init
"""
PWAcommerce Backend - Middleware Package
==========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request id is assigned first so the access log line of the request
    carries it, and it is echoed back in the X-Request-ID response header.
"""
