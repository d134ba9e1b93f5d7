"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gulita.core.config import get_settings
from gulita.core.exceptions import (
    BlogNotFoundError,
    CheckNotFoundError,
    DuplicateBlogTitleError,
    DuplicateUserError,
    ForbiddenError,
    GulitaError,
    InvalidCategoryError,
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    InvalidRefreshTokenError,
    ServiceUnavailableError,
    TokenError,
    UserNotFoundError,
    ValidationError,
)
from gulita.core.logging import bind_correlation_id, clear_context, configure_logging, get_logger
from gulita.infrastructure.api.container import ServiceContainer, build_services
from gulita.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)

ERROR_STATUS_CODES: dict[type[GulitaError], int] = {
    ValidationError: 400,
    InvalidCategoryError: 400,
    InvalidCredentialsError: 401,
    InvalidCurrentPasswordError: 401,
    TokenError: 401,
    InvalidRefreshTokenError: 401,
    ForbiddenError: 403,
    UserNotFoundError: 404,
    BlogNotFoundError: 404,
    CheckNotFoundError: 404,
    DuplicateUserError: 409,
    DuplicateBlogTitleError: 409,
    ServiceUnavailableError: 503,
}

HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def status_code_for(exc: GulitaError) -> int:
    """HTTP status for an application error, 500 when it has no mapping."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


def error_body(message: str, error: str, details: Any = None) -> dict[str, Any]:
    body = {"status": "error", "message": message, "error": error}
    if details is not None:
        body["details"] = details
    return body


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and, unless services were injected when the app was
    created, initializes the database and builds the service container.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting Gulita",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    db = None
    if app.state.services is None:
        db = get_db_manager()
        try:
            await init_database(db)
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise
        app.state.services = build_services(db, settings)

    yield

    logger.info("Shutting down Gulita")
    if db is not None:
        await close_database(db)
        logger.info("Database connection closed")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        services: Pre-built services. When omitted they are built on startup
                  from the configured database.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Health tracking backend: accounts, diabetes risk checks and articles",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
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
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity or other dependencies.
        """
        return {
            "status": "healthy",
            "service": "Gulita",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check(request: Request):
        """Readiness check endpoint, including a database probe."""
        services = request.app.state.services
        db_healthy = services is not None and await services.db.check_connection()

        if db_healthy:
            return {
                "status": "ready",
                "service": "Gulita",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "Gulita",
                "database": "disconnected",
            },
        )

    @app.get("/live", tags=["health"])
    async def liveness_check():
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": "Gulita",
            "version": get_settings().app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from gulita.infrastructure.api.routes import (
        auth_router,
        blogs_router,
        checks_router,
        users_router,
    )

    settings = get_settings()

    app.include_router(auth_router, prefix=f"{settings.api_prefix}/users", tags=["auth"])
    app.include_router(users_router, prefix=f"{settings.api_prefix}/users", tags=["users"])
    app.include_router(checks_router, prefix=f"{settings.api_prefix}/users/checks", tags=["checks"])
    app.include_router(blogs_router, prefix=f"{settings.api_prefix}/blogs", tags=["blogs"])

    @app.get(settings.api_prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(GulitaError)
    async def application_error_handler(request: Request, exc: GulitaError):
        """Map an application error to its status code and error envelope."""
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error(
                "Request failed",
                path=str(request.url.path),
                method=request.method,
                error=exc.message,
                exc_type=type(exc).__name__,
            )

        if exc.code == GulitaError.code:
            # Internal failures never expose their message
            content = error_body(GulitaError.default_message, GulitaError.code)
        else:
            content = error_body(exc.message, exc.code, exc.details)

        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, TokenError) else None
        return JSONResponse(status_code=status_code, content=content, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report request validation failures field by field."""
        details = []
        for error in exc.errors():
            location = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
            details.append(
                {
                    "field": ".".join(location) or str(error["loc"][-1]),
                    "message": error["msg"],
                }
            )
        return JSONResponse(
            status_code=400,
            content=error_body(ValidationError.default_message, ValidationError.code, details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(
                str(exc.detail),
                HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            ),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.exception(
            "Unhandled exception",
            path=str(request.url.path),
            method=request.method,
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content=error_body(GulitaError.default_message, GulitaError.code),
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and propagate a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
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
