"""
Album API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with the AlbumService stored on app.state.
Who:   Called by the album-api entry point, by uvicorn
       (uvicorn albumapi.main:create_app --factory) and by the tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐               │
    │  │   Req ID     │→│    Logging      │               │
    │  └──────────────┘ └─────────────────┘               │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌─────────────────┐ ┌─────────────┐ │
    │  │ GET/POST   │ │ GET             │ │ GET /health │ │
    │  │ /albums    │ │ /albums/{id}    │ │             │ │
    │  └────────────┘ └─────────────────┘ └─────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Backend→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from albumapi import __version__
from albumapi.config import Settings, get_settings
from albumapi.exceptions import BackendError, NotFoundError
from albumapi.middleware.logging import RequestLoggingMiddleware
from albumapi.middleware.request_id import RequestIDMiddleware, request_id_var
from albumapi.routes import albums, health
from albumapi.services.airtable_service import AirtableTable
from albumapi.services.album_service import AlbumService
from albumapi.services.table_base import TableBackend

logger = logging.getLogger(__name__)


class IndentedJSONResponse(JSONResponse):
    """JSON response rendered with four-space indentation."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=4,
        ).encode("utf-8")


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Called once by the process entry point before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; httpx logs every backend request at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup; close the backend HTTP client on shutdown."""
    settings: Settings = app.state.settings
    logger.info("Album API %s starting up", __version__)
    logger.info(
        "Serving albums from Airtable base=%s table=%s",
        settings.airtable_base_id,
        settings.airtable_table,
    )

    yield

    logger.info("Album API shutting down...")
    await app.state.album_service.table.aclose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI's validation error list into one line of text."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        msg = error.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 {"error": decode diagnostic}
        NotFoundError           → 404 {"message": "album not found"}
        BackendError            → 500 {"error": message}
        Exception (fallback)    → 500 {"error": "internal server error"}
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body did not decode into an Album: report it as a client error."""
        message = _format_validation_errors(exc)
        logger.warning("[%s] Malformed request body: %s", request_id_var.get(""), message)
        return IndentedJSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return IndentedJSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(BackendError)
    async def handle_backend_error(request: Request, exc: BackendError):
        """Backend call failed: relay its error text to the caller."""
        logger.error(
            "[%s] Backend error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return IndentedJSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for unexpected errors; the stack trace is logged only."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return IndentedJSONResponse(
            status_code=500,
            content={"error": "internal server error"},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    table: Optional[TableBackend] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted.
        table:    Backend to serve albums from. When omitted, an AirtableTable
                  is built from settings, which requires the Airtable
                  variables to be set.

    Raises:
        ConfigurationError: No table was given and settings lack a required value.
    """
    settings = settings or get_settings()
    if table is None:
        settings.validate_required()
        table = AirtableTable(settings)

    app = FastAPI(
        title="Album API",
        description="JSON album records backed by an Airtable table.",
        version=__version__,
        default_response_class=IndentedJSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.album_service = AlbumService(table)

    # Middleware executes in REVERSE order of addition: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(albums.router)
    app.include_router(health.router)

    return app
