"""FastAPI application - Identity Admin.

Thin HTTP transport над application handlers:
- Composition root будується в lifespan
- Domain errors мапляться на HTTP status codes в одному місці
- Structured logging з request correlation id
"""

import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from starlette.middleware.base import BaseHTTPMiddleware

from identity_admin import __version__
from identity_admin.composition_root import create_container, seed_default_roles
from identity_admin.config import (
    bind_request_context,
    clear_request_context,
    get_logger,
    get_settings,
    setup_logging,
)
from identity_admin.domain.shared import (
    AuthorizationException,
    AuthorizationExceptionCode,
    BusinessException,
    CodedException,
    ConcurrencyConflict,
    ValidationException,
)
from identity_admin.infrastructure.persistence.sqlalchemy import Base
from identity_admin.presentation.api import dependencies
from identity_admin.presentation.api.v1.routes import (
    account_router,
    roles_router,
    user_groups_router,
    users_router,
)

# Load settings
settings = get_settings()

# Configure structured logging
setup_logging(settings)
logger = get_logger(__name__)


# ============================================================================
# LIFESPAN EVENTS (startup/shutdown)
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager для FastAPI.

    Startup:
    - Create database engine + session factory
    - Create tables (development only; інакше Alembic)
    - Build container (event handler registry freezes тут)
    - Seed default roles

    Shutdown:
    - Dispose engine
    """
    logger.info("application.startup.started")

    engine = create_async_engine(settings.database_url, **settings.engine_kwargs())

    if settings.is_development:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("application.database.tables_created")

    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    container = create_container(session_factory, settings)
    await seed_default_roles(container.role_repository)
    dependencies.init_dependencies(container)

    logger.info("application.startup.completed")

    yield  # Serving phase

    # ===== SHUTDOWN =====
    logger.info("application.shutdown.started")
    dependencies.reset_dependencies()
    await engine.dispose()
    logger.info("application.shutdown.completed")


# ============================================================================
# CREATE FASTAPI APPLICATION
# ============================================================================


app = FastAPI(
    title=settings.app_name,
    description="""
    Identity administration backend: users, user groups, roles.

    - Aggregates persisted with optimistic concurrency (version column)
    - Domain events appended to an outbox table in the same transaction
    - Events dispatched to in-process handlers after commit
    """,
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)

# ============================================================================
# MIDDLEWARE
# ============================================================================


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to add request correlation ID to all log messages."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        bind_request_context(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_request_context()


# Add middlewares (order matters - last added is executed first)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# ERROR HANDLERS
# ============================================================================


def _error_response(status_code: int, exc: CodedException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "code": exc.code_value,
            "message": exc.message,
            "data": jsonable_encoder(exc.data),
        },
    )


@app.exception_handler(ConcurrencyConflict)
async def concurrency_conflict_handler(
    request: Request, exc: ConcurrencyConflict
) -> JSONResponse:
    logger.warning("api.concurrency_conflict", path=request.url.path, code=exc.code_value)
    return _error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(ValidationException)
async def domain_validation_handler(
    request: Request, exc: ValidationException
) -> JSONResponse:
    logger.info("api.validation_failed", path=request.url.path, code=exc.code_value)
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(BusinessException)
async def business_exception_handler(
    request: Request, exc: BusinessException
) -> JSONResponse:
    logger.warning("api.business_error", path=request.url.path, code=exc.code_value)
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)


@app.exception_handler(AuthorizationException)
async def authorization_exception_handler(
    request: Request, exc: AuthorizationException
) -> JSONResponse:
    forbidden = exc.code_value == AuthorizationExceptionCode.FORBIDDEN.value
    logger.info("api.authorization_failed", path=request.url.path, code=exc.code_value)
    response = _error_response(
        status.HTTP_403_FORBIDDEN if forbidden else status.HTTP_401_UNAUTHORIZED, exc
    )
    if not forbidden:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors (malformed request body / params)."""
    logger.warning("api.request_validation_error", path=request.url.path, errors=exc.errors())

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "RequestValidationError",
            "code": None,
            "message": "Request validation failed",
            "data": {"errors": exc.errors()},
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions (DB errors, dispatch failures after commit)."""
    logger.exception(
        "api.unhandled_exception",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "InternalServerError",
            "code": None,
            "message": "An unexpected error occurred. Please try again later.",
            "data": None,
        },
    )


# ============================================================================
# ROUTES
# ============================================================================


@app.get("/health", tags=["Health"], summary="Health check")
async def health_check() -> dict:
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@app.get("/health/live", tags=["Health"], summary="Liveness probe")
async def liveness_check() -> dict:
    return {"status": "alive"}


app.include_router(account_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(user_groups_router, prefix="/api/v1")
app.include_router(roles_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    # Run with: python -m identity_admin.main
    uvicorn.run(
        "identity_admin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level="info",
    )
