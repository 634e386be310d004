"""
Works API - FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; `app` at module
       level is what uvicorn serves (uvicorn worksapi.main:app), and run()
       starts uvicorn on the configured host/port.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌──────┐ ┌───────────────┐  │
    │  │ Req ID │→│ Logging │→│ CORS │→│ UnhandledError│  │
    │  └────────┘ └─────────┘ └──────┘ └───────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────┐ ┌───────┐ ┌──────┐  │
    │  │ /api/works.. │ │ /health   │ │ /     │ │/docs │  │
    │  └──────────────┘ └───────────┘ └───────┘ └──────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFound→404 │ OperationFailed→500 │ other→500│   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, open the Database handle (fatal on failure)
    Shutdown: close the Database handle
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from worksapi import __version__
from worksapi.config import Settings, settings as default_settings
from worksapi.database import Database
from worksapi.exceptions import NotFoundError, OperationFailedError, WorksAPIError
from worksapi.middleware.errors import UnhandledErrorMiddleware
from worksapi.middleware.logging import RequestLoggingMiddleware
from worksapi.middleware.request_id import RequestIDMiddleware, request_id_var
from worksapi.routes import health, works

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the database handle on startup and close it on shutdown.

    A database that cannot be reached at startup is logged and re-raised,
    which aborts uvicorn's startup instead of serving requests that would
    all fail.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Works API starting up...")

    database: Database = app.state.database
    try:
        await database.connect()
    except Exception as e:
        logger.critical("Could not connect to database: %s", str(e))
        raise

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("Works API shutting down...")
    await database.disconnect()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and minimal JSON bodies.

    Handler hierarchy:
        NotFoundError           → 404 {"message": "work not found"}
        OperationFailedError    → 500 {"message": <fixed per-operation text>}
        WorksAPIError (base)    → 500 generic message
        RequestValidationError  → 500 {"message": <fixed per-operation text>}

    Anything else is turned into a 500 by UnhandledErrorMiddleware, inside
    the request-id layer so the response still carries X-Request-ID.

    Context dicts and original error text are logged, never returned.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.warning("[%s] %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(OperationFailedError)
    async def handle_operation_failed(request: Request, exc: OperationFailedError):
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(WorksAPIError)
    async def handle_works_api_error(request: Request, exc: WorksAPIError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context
        )
        return JSONResponse(
            status_code=500,
            content={"message": "An internal error occurred. Please try again later."},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """
        A body that cannot be read as a work payload (array, nested object,
        malformed JSON) fails the operation like any other store error.
        """
        rid = request_id_var.get("")
        endpoint = request.scope.get("endpoint")
        message = works.FAILURE_MESSAGES.get(
            getattr(endpoint, "__name__", ""), "unable to process request"
        )
        logger.error("[%s] %s: request validation failed | Errors: %s", rid, message, exc.errors())
        return JSONResponse(status_code=500, content={"message": message})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; the module-level settings when omitted.
        database: Database handle; built from settings when omitted. The app
                  owns it: the lifespan connects and disconnects it.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Works API",
        description="A simple CRUD API for work items (title + description).",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → UnhandledError
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(works.router)
    app.include_router(health.router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "Hello World!"

    return app


app = create_app()


def run() -> None:
    """Serve the module-level app with uvicorn (console script `works-api`)."""
    uvicorn.run(
        "worksapi.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
