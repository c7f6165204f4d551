"""
DevConnector Backend: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app(settings)` wires everything once, in dependency order:

    Settings ──▶ Database ──▶ Repositories ──▶ Services ──▶ app.state
                                                              │
    Routes ◀── FastAPI dependencies (devconnector.dependencies)┘

    Tests call `create_app(Settings(database_url="sqlite+aiosqlite://"))`
    and get a fully isolated application.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │  Middleware: Request ID → Access Log → GZip → CORS  │
    │                                                     │
    │  Routes: /api/users  /api/auth  /api/profile        │
    │          /api/posts  /health                        │
    │                                                     │
    │  Exception Handlers (all answer {"errors": [...]}): │
    │   RequestValidationError/ValidationError → 400      │
    │   Unauthenticated/Unauthorized → 401                │
    │   NotFound → 404   Database/unexpected → 500        │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from devconnector import __version__
from devconnector.config import Settings, settings as default_settings
from devconnector.database import Database
from devconnector.exceptions import (
    DatabaseError,
    DevConnectorError,
    NotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
    ValidationError,
)
from devconnector.middleware.logging import RequestLoggingMiddleware
from devconnector.middleware.request_id import RequestIDMiddleware, request_id_var
from devconnector.repositories import PostRepository, ProfileRepository, UserRepository
from devconnector.routes import health, posts, profile, users
from devconnector.services import PostService, ProfileService, UserService
from devconnector.validation import format_request_errors, missing_body_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure process-wide logging.

    Format: 2024-01-15T12:00:00 [INFO] devconnector.access: GET /api/posts 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("DevConnector backend starting up (version %s)", __version__)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: a dev machine without a secret should still start
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("DevConnector backend shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, errors: list) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": errors})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Every handler answers with the same envelope:
        {"errors": [{"msg": "...", "param": "..."}]}

    Security: 5xx responses never include driver errors or stack traces;
    those are logged server-side with the request id.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = format_request_errors(
            missing_body_errors(exc.errors(), request.scope.get("endpoint"))
        )
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), errors)
        return _error_response(400, errors)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.status_code, exc.errors)

    @app.exception_handler(UnauthenticatedError)
    async def handle_unauthenticated(request: Request, exc: UnauthenticatedError):
        logger.warning("[%s] Unauthenticated: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.status_code, exc.errors)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        logger.warning("[%s] Unauthorized: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.status_code, exc.errors)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("[%s] Not found: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.status_code, exc.errors)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, [{"msg": "Internal server error"}])

    @app.exception_handler(DevConnectorError)
    async def handle_app_error(request: Request, exc: DevConnectorError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.status_code, exc.errors)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(500, [{"msg": "Internal server error"}])


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def build_state(app: FastAPI, app_settings: Settings) -> None:
    """Construct the database, repositories and services for one app."""
    database = Database(app_settings)
    user_repository = UserRepository(database.session_factory)
    profile_repository = ProfileRepository(database.session_factory)
    post_repository = PostRepository(database.session_factory)

    app.state.settings = app_settings
    app.state.database = database
    app.state.user_service = UserService(user_repository, app_settings)
    app.state.profile_service = ProfileService(profile_repository, user_repository, post_repository)
    app.state.post_service = PostService(post_repository, user_repository)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: settings to use; the environment-loaded defaults
                      when omitted.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="DevConnector API",
        description="Developer social network: accounts, profiles, posts, comments and likes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    build_state(app, app_settings)

    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(profile.router)
    app.include_router(posts.router)
    app.include_router(health.router)

    return app


# uvicorn devconnector.main:app
app = create_app()
