"""
Commander Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the process-wide wiring once (engine, session
       factory, repository provider), registers middleware, exception
       handlers and routes, and returns the app.
Who:   uvicorn (`uvicorn commander.main:app`) and the test suite, which calls
       create_app() with its own Settings.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access log → CORS        │
    │                                                     │
    │  Routes:      /api/commands (CRUD + JSON Patch)     │
    │               /health                               │
    │               /swagger (interactive API page)       │
    │                                                     │
    │  Exception handlers:                                │
    │    NotFound→404 │ Validation→400 │ Persistence→500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, schema creation
    Shutdown: engine disposal
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from commander import __version__
from commander.config import Settings, settings as default_settings
from commander.database import (
    build_engine,
    build_session_factory,
    create_tables,
    dispose_engine,
)
from commander.exceptions import NotFoundError, PersistenceError, ValidationError
from commander.middleware.logging import RequestLoggingMiddleware
from commander.middleware.request_id import RequestIDMiddleware, request_id_var
from commander.repositories import RepositoryProvider
from commander.routes import commands, health
from commander.schemas.command import ErrorResponse, ValidationProblem
from commander.services.command_service import field_errors

logger = logging.getLogger(__name__)

API_DESCRIPTION = (
    "This stores and retrieves terminal commands. "
    "To be used as a reminder, when forgetting details about commands."
)


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    SQL echo and per-request uvicorn access lines are lowered to WARNING;
    commander.access already logs each request.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Configure logging
        2. Validate configuration (problems are logged, startup continues)
        3. Create the commands table when enabled and the sql backend is active
    Shutdown:
        1. Dispose the engine (close pooled connections)
    """
    settings: Settings = app.state.settings

    setup_logging(settings)
    logger.info("Commander backend starting (repository=%s)", settings.repository_backend)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.warning("%s", str(e))

    if settings.repository_backend == "sql" and settings.db_create_tables:
        await create_tables(app.state.engine)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API page: http://%s:%d%s", settings.backend_host, settings.backend_port, app.docs_url)

    yield

    logger.info("Commander backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def _validation_problem(request: Request, errors: Dict[str, List[str]]) -> JSONResponse:
    body = ValidationProblem(errors=errors, trace_id=_request_id(request))
    return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))


def _error(request: Request, status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, request_id=_request_id(request))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to responses.

        NotFoundError           → 404, empty body
        ValidationError         → 400 validation problem
        RequestValidationError  → 400 validation problem (malformed body/path)
        PersistenceError        → 500
        NotImplementedError     → 501 (mock repository writes)
        Exception               → 500, stack trace logged only
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("[%s] %s", _request_id(request), exc.message)
        return Response(status_code=404)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation failed: %s", _request_id(request), exc.errors)
        return _validation_problem(request, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = field_errors(exc.errors())
        logger.warning("[%s] Invalid request: %s", _request_id(request), errors)
        return _validation_problem(request, errors)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        logger.error("[%s] Persistence error: %s | Context: %s", _request_id(request), exc.message, exc.context)
        return _error(request, 500, "persistence_error", exc.message)

    @app.exception_handler(NotImplementedError)
    async def handle_not_implemented(request: Request, exc: NotImplementedError):
        logger.error("[%s] Not implemented: %s", _request_id(request), str(exc))
        return _error(
            request,
            501,
            "not_implemented",
            "This operation is not supported by the configured repository.",
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", _request_id(request), str(exc), exc_info=True)
        return _error(
            request,
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The engine, session factory and repository provider are built here,
    once, and stored on app.state; request handlers reach them only through
    dependencies.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Commander",
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/swagger",
        redoc_url="/redoc",
        openapi_url="/swagger/v1/swagger.json",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.repositories = RepositoryProvider(
        backend=settings.repository_backend,
        session_factory=build_session_factory(engine),
    )

    # Middleware runs in reverse order of addition:
    # RequestID → Logging → CORS → routes.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(commands.router)
    app.include_router(health.router)

    return app


app = create_app()
