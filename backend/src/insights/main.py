"""FastAPI application entry point."""
import traceback
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from insights.config import settings
from insights.exceptions import ControllerDisposed, ExportError, NoDataToExport
from insights.middleware.logging import LoggingMiddleware, setup_logging
from insights.middleware.metrics import MetricsMiddleware
from insights.runtime import create_runtime
from insights.schemas.error import REMEDIATION_HINTS, ErrorCode, ErrorDetail, ErrorResponse

# Setup structured logging
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start the metrics poller on startup and dispose of it on shutdown."""
    logger.info("application_starting", env=settings.app_env)
    runtime = create_runtime(settings)
    app.state.runtime = runtime
    await runtime.controller.open()
    try:
        yield
    finally:
        logger.info("application_shutting_down")
        await runtime.controller.aclose()


# Create FastAPI application
app = FastAPI(
    title="ADmyBRAND Insights",
    description="Marketing analytics dashboard API with live overview metrics",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add metrics and request logging middleware
app.add_middleware(MetricsMiddleware)
app.add_middleware(LoggingMiddleware)

# Mount Prometheus metrics endpoint
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

if settings.tracing_enabled:
    from insights.tracing import setup_tracing

    setup_tracing(app)


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", f"req_{uuid.uuid4().hex[:12]}")


def _error_response(status_code: int, body: ErrorResponse, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)


# Pydantic v2 error types mapped to our error codes
VALIDATION_CODE_MAPPING = {
    "missing": ErrorCode.MISSING_REQUIRED_FIELD,
    "enum": ErrorCode.INVALID_ENUM_VALUE,
    "date_parsing": ErrorCode.INVALID_DATE,
    "date_from_datetime_parsing": ErrorCode.INVALID_DATE,
    "greater_than": ErrorCode.INVALID_INTERVAL,
    "int_parsing": ErrorCode.INVALID_INTERVAL,
}


# Exception handlers with structured error responses
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle Pydantic validation errors with structured response.

    Returns 422 with detailed field-level validation errors.
    """
    request_id = _request_id(request)

    details = []
    for error in exc.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])
        code = VALIDATION_CODE_MAPPING.get(error["type"], ErrorCode.VALIDATION_ERROR)
        value = error.get("input")

        details.append(
            ErrorDetail(
                code=code,
                message=error["msg"],
                field=field_path,
                value=value if isinstance(value, (str, int, float, bool)) else None,
            )
        )

    logger.warning(
        "validation_error",
        path=request.url.path,
        method=request.method,
        request_id=request_id,
        error_count=len(details),
    )

    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorResponse(
            error="ValidationError",
            message="Request validation failed",
            details=details,
            remediation="Check the API documentation for correct request format at /docs",
            request_id=request_id,
        ),
    )


@app.exception_handler(NoDataToExport)
async def no_data_exception_handler(request: Request, exc: NoDataToExport) -> JSONResponse:
    """Export requested for an empty table. Returns 404."""
    request_id = _request_id(request)

    logger.info("export_skipped_no_data", path=request.url.path, request_id=request_id)

    return _error_response(
        status.HTTP_404_NOT_FOUND,
        ErrorResponse(
            error="NoDataToExport",
            message=exc.message,
            details=[ErrorDetail(code=ErrorCode.NO_DATA_TO_EXPORT, message=exc.message)],
            remediation=REMEDIATION_HINTS.get(ErrorCode.NO_DATA_TO_EXPORT),
            request_id=request_id,
        ),
    )


@app.exception_handler(ExportError)
async def export_exception_handler(request: Request, exc: ExportError) -> JSONResponse:
    """Report rendering failed. Returns 500."""
    request_id = _request_id(request)

    logger.error("export_failed", path=request.url.path, request_id=request_id, error_message=exc.message)

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error="ExportError",
            message="Export could not be generated",
            details=[
                ErrorDetail(
                    code=ErrorCode.EXPORT_FAILED,
                    message=exc.message if settings.debug else "Export failed",
                )
            ],
            remediation=REMEDIATION_HINTS.get(ErrorCode.EXPORT_FAILED),
            request_id=request_id,
        ),
    )


@app.exception_handler(ControllerDisposed)
async def controller_disposed_handler(request: Request, exc: ControllerDisposed) -> JSONResponse:
    """
    Lifecycle call reached a disposed poller.

    Returns 503 Service Unavailable.
    """
    request_id = _request_id(request)

    logger.warning("controller_disposed", path=request.url.path, request_id=request_id)

    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        ErrorResponse(
            error="ServiceUnavailable",
            message=exc.message,
            details=[ErrorDetail(code=ErrorCode.CONTROLLER_UNAVAILABLE, message=exc.message)],
            remediation=REMEDIATION_HINTS.get(ErrorCode.CONTROLLER_UNAVAILABLE),
            request_id=request_id,
        ),
        headers={"Retry-After": "30"},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all other uncaught exceptions.

    Returns 500 Internal Server Error for unexpected exceptions.
    Logs full stack trace for debugging but returns safe error message to client.
    """
    request_id = _request_id(request)

    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        request_id=request_id,
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        stack_trace=traceback.format_exc(),
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error="InternalServerError",
            message="An unexpected error occurred",
            details=[
                ErrorDetail(
                    code=ErrorCode.INTERNAL_ERROR,
                    message=str(exc) if settings.debug else "Internal server error",
                )
            ],
            remediation="Please contact support with the request ID",
            request_id=request_id,
        ),
    )


# Root endpoint
@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "service": "ADmyBRAND Insights",
        "version": "0.1.0",
        "status": "operational",
        "docs": "/docs",
    }


# Include routers
from insights.api.v1 import campaigns, charts, health, metrics  # noqa: E402

app.include_router(health.router, tags=["Health"])
app.include_router(metrics.router, prefix="/v1", tags=["Metrics"])
app.include_router(campaigns.router, prefix="/v1", tags=["Campaigns"])
app.include_router(charts.router, prefix="/v1", tags=["Charts"])
