"""
PWAcommerce Backend - Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the admin and upload surfaces.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) map them to
       structured JSON error responses.

Exception Hierarchy:
    PWACommerceError (base)
    ├── ValidationError     → 400 Bad Request
    ├── AuthorizationError  → 403 Forbidden
    ├── FileStorageError    → 500 Internal Server Error
    └── DatabaseError       → 500 Internal Server Error

The commerce endpoints never raise these. Errors from the remote store
client propagate as-is and are rendered by the catch-all handler.
"""

from typing import Any, Dict, Optional


class PWACommerceError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client
                  unless the handler chooses to)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PWACommerceError):
    """
    Raised when client input fails validation.

    When:    Icon upload with a wrong type, size or shape; empty settings update.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthorizationError(PWACommerceError):
    """Admin request with a missing or wrong X-Admin-Key header (HTTP 403)."""

    def __init__(
        self,
        message: str = "Admin key is missing or invalid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(PWACommerceError):
    """
    Raised when icon files cannot be read, resized or written.

    HTTP:    500 Internal Server Error
    The client gets a generic message; paths and OS errors stay in the logs.
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PWACommerceError):
    """
    Raised when options or cart lines cannot be read or written.

    HTTP:    500 Internal Server Error
    The message returned to the client is always generic.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
