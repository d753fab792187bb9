"""
PWAcommerce Backend - FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (uvicorn pwacommerce.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  Request ID → Logging → GZip → CORS         │
    │                                                          │
    │  Routers:                                                │
    │  ┌──────────────────────┐ ┌──────────────┐ ┌──────────┐ │
    │  │ /pwacommerce/* (7)   │ │ /admin/*     │ │ /health  │ │
    │  │ credential-gated     │ │ admin-key    │ │          │ │
    │  └──────────────────────┘ └──────────────┘ └──────────┘ │
    │                                                          │
    │  Static: /uploads/icons → {storage_root}/icons           │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, icon directory
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pwacommerce import __version__
from pwacommerce.config import settings
from pwacommerce.database import dispose_engine
from pwacommerce.exceptions import (
    AuthorizationError,
    DatabaseError,
    FileStorageError,
    ValidationError,
)
from pwacommerce.middleware.logging import RequestLoggingMiddleware
from pwacommerce.middleware.request_id import RequestIDMiddleware, request_id_var
from pwacommerce.routes import admin, health
from pwacommerce.routes.commerce import build_commerce_router

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # One line per store call from these is too much at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def icons_directory() -> Path:
    return Path(settings.storage_root).resolve() / "icons"


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("PWAcommerce backend %s starting up", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health and the admin API still work
        logger.error("Configuration error: %s", str(e))

    icons = icons_directory()
    icons.mkdir(parents=True, exist_ok=True)
    logger.info("Icon directory: %s", icons)
    logger.info("Store: %s (API %s)", settings.site_url or "<unset>", settings.api_version)
    logger.info("Commerce endpoints under %s", settings.api_namespace)

    yield

    logger.info("PWAcommerce backend shutting down")
    await dispose_engine()


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

        ValidationError     → 400
        AuthorizationError  → 403
        FileStorageError    → 500
        DatabaseError       → 500
        Exception           → 500 (store client errors land here)

    Responses never carry stack traces, SQL or file paths.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(AuthorizationError)
    async def handle_authorization_error(request: Request, exc: AuthorizationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Rejected admin request to %s", rid, request.url.path)
        return JSONResponse(
            status_code=403,
            content={
                "error": "forbidden",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        rid = request_id_var.get("")
        logger.error("[%s] File storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error on %s: %s",
            rid,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="PWAcommerce API",
        description=(
            "Storefront API for a WooCommerce progressive web app: catalog "
            "passthrough, web app manifest and cart-to-checkout redirect."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,  # cart session cookie
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(build_commerce_router())
    app.include_router(admin.router)
    app.include_router(health.router)

    if settings.uploads_base_url.startswith("/"):
        app.mount(
            settings.uploads_base_url,
            StaticFiles(directory=str(icons_directory()), check_dir=False),
            name="icons",
        )

    return app


app = create_app()
