"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from thinkink.core.config import get_settings
from thinkink.core.exceptions import ThinkInkError
from thinkink.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from thinkink.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting ThinkInk",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        media_provider=settings.media_provider,
    )

    if settings.media_provider == "local":
        Path(settings.media_local_path).mkdir(parents=True, exist_ok=True)

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down ThinkInk")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Blogging backend: accounts, sessions and posts with cover images",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Must be added before CORS so that 500 responses pass through it
    register_error_middleware(app)

    # The session cookie must cross origins, so credentials are allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_check(app)
    register_routes(app)
    register_static_files(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Returns 200 if the service is running."""
        return {
            "status": "healthy",
            "service": "ThinkInk",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Returns 200 if the database is reachable, 503 otherwise."""
        if await get_db_manager().check_connection():
            return {
                "status": "ready",
                "service": "ThinkInk",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "ThinkInk",
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from thinkink.infrastructure.api.routes import auth_router, posts_router

    app.include_router(auth_router, tags=["auth"])
    app.include_router(posts_router, tags=["posts"])


def register_static_files(app: FastAPI) -> None:
    """Serve locally stored media under ``/uploads``."""
    settings = get_settings()
    if settings.media_provider != "local":
        return

    app.mount(
        "/uploads",
        StaticFiles(directory=settings.media_local_path, check_dir=False),
        name="uploads",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(ThinkInkError)
    async def thinkink_exception_handler(request: Request, exc: ThinkInkError):
        """Render domain errors with their mapped status."""
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                path=str(request.url.path),
                method=request.method,
                error=exc.message,
                exc_type=type(exc).__name__,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Render request validation failures as 400."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation error",
                "details": [
                    {
                        "field": ".".join(str(part) for part in error["loc"][1:]),
                        "message": error["msg"],
                        "code": error["type"],
                    }
                    for error in exc.errors()
                ],
            },
        )


def register_error_middleware(app: FastAPI) -> None:
    """Turn uncaught exceptions into a JSON 500 response.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def error_middleware(request: Request, call_next):
        """Handle uncaught exceptions."""
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Unhandled exception",
                path=str(request.url),
                method=request.method,
                error=str(exc),
                exc_type=type(exc).__name__,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "message": str(exc) if get_settings().debug else "An unexpected error occurred",
                },
            )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and tag it with a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", new_correlation_id())
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
