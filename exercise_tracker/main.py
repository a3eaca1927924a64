"""
Exercise Tracker: FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the Database handle, middleware, exception handlers
       and routes; `app` is the module-level instance uvicorn imports.
Who:   uvicorn (`uvicorn exercise_tracker.main:app`), the `exercise-tracker`
       console script (run()), and tests (create_app with test settings).

Application Architecture:
    Middleware (outermost first): Request ID → Logging → GZip → CORS
    Routes:   GET /   GET /health   /api/users   /api/users/{_id}/exercises|logs
    Static:   files under PUBLIC_DIR served from the site root
    Errors:   NotFoundError → 200   UserCreationError → 200
              DatabaseError → 500   anything else → 500
              every error body is {"error": "<message>"}

Lifecycle:
    Startup:  configure logging, create tables, log the listening address
    Shutdown: dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from exercise_tracker import __version__
from exercise_tracker.config import Settings, settings as default_settings
from exercise_tracker.database import Database
from exercise_tracker.exceptions import ExerciseTrackerError
from exercise_tracker.middleware.logging import RequestLoggingMiddleware
from exercise_tracker.middleware.request_id import RequestIDMiddleware, RequestIdLogFilter
from exercise_tracker.routes import exercises, health, pages, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] [a1b2c3d4] exercise_tracker.services.user_service: ...
    The bracketed request id comes from RequestIdLogFilter ("-" outside a request).
    Third-party loggers that log every request or statement are raised to WARNING.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("Exercise Tracker %s starting up", __version__)

    if app_settings.create_tables_on_startup:
        await database.create_tables()

    logger.info("Your app is listening on port %d", app_settings.port)

    yield

    logger.info("Exercise Tracker shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": message}` bodies.

    Context attached to an exception is logged and never returned to the
    client. The message is also left on request.state.error for the access log.
    """

    @app.exception_handler(ExerciseTrackerError)
    async def handle_app_error(request: Request, exc: ExerciseTrackerError):
        request.state.error = exc.message
        if exc.status_code >= 500:
            logger.error("%s | Context: %s", exc.message, exc.context)
        else:
            logger.info("%s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the environment-loaded ones.

    Returns:
        A configured FastAPI instance. Its store handle is `app.state.database`;
        tables are created by the lifespan handler (or by calling
        `await app.state.database.create_tables()` directly).
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Exercise Tracker API",
        description="Track users and their exercise sessions; query filtered exercise logs.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = Database(app_settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(pages.router)
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(exercises.router)

    # Mounted last so API routes take precedence over same-named files
    public_dir = Path(app_settings.public_dir)
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(public_dir)), name="public")
    else:
        logger.warning("Static directory not found, not serving assets: %s", public_dir)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve `app` with uvicorn on HOST:PORT."""
    uvicorn.run(
        app,
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
