"""
FastAPI Application Setup

Main entry point for the fibjobs HTTP gateway.

Responsibility:
    - FastAPI app initialization
    - Resource lifecycle (lifespan): open Redis/PostgreSQL on startup,
      release on shutdown
    - Router registration (/values)
    - Global exception handlers (domain -> 400, infrastructure -> 500)
    - Request logging middleware
    - Liveness (GET /) and health (GET /health) endpoints

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - No business logic - pure HTTP orchestration

Usage:
    uvicorn fibjobs.api.main:app --host 0.0.0.0 --port 5000
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from fibjobs import __version__
from fibjobs.api.dependencies import GatewayResources, open_gateway_resources
from fibjobs.api.routers import values
from fibjobs.api.schemas.common import ErrorResponse
from fibjobs.config import ConfigMissingError, Settings, configure_logging
from fibjobs.domain.shared.exceptions import (
    DomainException,
    InvalidInputError,
    OutOfRangeError,
)
from fibjobs.infrastructure.exceptions import InfrastructureError

# Configure logger (root logging is set up in lifespan from Settings.log_level)
logger = logging.getLogger(__name__)


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: "ok", or "degraded" when a deep check failed
        version: Package version
        timestamp: Unix timestamp of health check
        checks: Per-dependency result, only for deep checks
    """

    status: str = "ok"
    version: str = __version__
    timestamp: float
    checks: Optional[Dict[str, bool]] = None


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Log every request with method, path, status code, and duration.

    Logging Format:
        INFO: "Incoming request: POST /values"
        INFO: "Request completed: POST /values - 200 - 0.004s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )

    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Convert domain exceptions to 400 Bad Request.

    Mapping:
        - InvalidInputError -> 400 INVALID_INPUT
        - OutOfRangeError   -> 400 OUT_OF_RANGE
        - Other DomainException -> 400 <CLASS NAME>

    Raised before any side effect, so a 400 always means nothing was written.
    """
    details: Dict[str, object] = {"exception_type": exc.__class__.__name__}

    if isinstance(exc, OutOfRangeError):
        error_code = "OUT_OF_RANGE"
        details.update(
            {"index": exc.index, "min_index": exc.min_index, "max_index": exc.max_index}
        )
    elif isinstance(exc, InvalidInputError):
        error_code = "INVALID_INPUT"
        details["raw_value"] = exc.raw_value
    else:
        error_code = exc.__class__.__name__.replace("Error", "").upper()

    error_response = ErrorResponse(code=error_code, message=exc.message, details=details)

    logger.warning(
        f"Domain exception: {exc.__class__.__name__} - {exc.message} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(),
    )


async def infrastructure_exception_handler(request: Request, exc: InfrastructureError):
    """
    Convert infrastructure failures to 500 Internal Server Error.

    The request was aborted at the failing step; earlier steps of a
    submission are not rolled back.
    """
    error_response = ErrorResponse(
        code=exc.code,
        message=exc.message,
        details={"exception_type": exc.__class__.__name__},
    )

    logger.error(
        f"Infrastructure failure: {exc.__class__.__name__} - {exc.message} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Catch-all for unexpected exceptions: 500 with full traceback in the log.
    """
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )

    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


# ============================================================================
# LIFESPAN
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the process-wide resources on startup and release them on shutdown.

    Resources already present on app.state (injected by create_app) are used
    as-is and left open; the caller that created them owns them.

    Raises:
        ConfigMissingError: A required environment variable is missing; the
            server does not start
        StoreUnavailableError / LogUnavailableError: A store is unreachable
            after the startup retries
    """
    owned = False

    if app.state.resources is None:
        try:
            settings = app.state.settings or Settings.from_env()
        except ConfigMissingError as e:
            configure_logging()
            logger.critical(f"Cannot start gateway: {e}")
            raise

        configure_logging(settings.log_level)
        app.state.resources = await run_in_threadpool(open_gateway_resources, settings)
        owned = True
        logger.info("Gateway resources opened")

    try:
        yield
    finally:
        if owned:
            resources: GatewayResources = app.state.resources
            app.state.resources = None
            await run_in_threadpool(resources.close)
            logger.info("Gateway resources released")


# ============================================================================
# APP FACTORY
# ============================================================================


def create_app(
    settings: Optional[Settings] = None,
    resources: Optional[GatewayResources] = None,
) -> FastAPI:
    """
    FastAPI application factory.

    Args:
        settings: Settings to open resources with (default: from environment
            at startup)
        resources: Already opened resources; when given, nothing is
            connected or closed by the app

    Returns:
        Configured FastAPI application instance

    Usage:
        >>> app = create_app()
        >>> # uvicorn fibjobs.api.main:app
    """
    app = FastAPI(
        title="fibjobs API",
        version=__version__,
        description=(
            "Submit Fibonacci jobs and poll their results. Jobs are acknowledged "
            "immediately and computed asynchronously by a separate worker."
        ),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.resources = resources

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(InfrastructureError, infrastructure_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(values.router)

    @app.get(
        "/",
        response_class=PlainTextResponse,
        summary="Liveness probe",
        tags=["health"],
    )
    def main_handler() -> str:
        logger.info("main handler")
        return "Hi"

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        summary="Health check endpoint",
        description="Add ?deep=true to also ping Redis and PostgreSQL",
        tags=["health"],
    )
    def health_check(
        request: Request,
        deep: bool = Query(default=False, description="Check store connectivity"),
    ) -> HealthCheckResponse:
        if not deep:
            return HealthCheckResponse(timestamp=time.time())

        resources: Optional[GatewayResources] = request.app.state.resources
        checks = {
            name: bool(check())
            for name, check in (resources.health_checks if resources else {}).items()
        }
        return HealthCheckResponse(
            status="ok" if all(checks.values()) else "degraded",
            timestamp=time.time(),
            checks=checks,
        )

    logger.info("FastAPI application created successfully")
    return app


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

app = create_app()


def run() -> None:
    """Console entry point: serve the gateway on port 5000."""
    import uvicorn

    uvicorn.run(
        "fibjobs.api.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
    )


if __name__ == "__main__":
    run()
