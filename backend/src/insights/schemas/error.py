"""Structured error response schemas."""
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    field: str | None = Field(default=None, description="Field that caused the error (for validation errors)")
    value: Any | None = Field(default=None, description="Invalid value (for validation errors)")


class ErrorResponse(BaseModel):
    """Standard error response structure.

    This provides consistent error responses across the API with:
    - Machine-readable error codes
    - Human-readable messages
    - Remediation hints
    - Request tracing information
    """

    error: str = Field(..., description="Error type (e.g., 'ValidationError', 'NotFound')")
    message: str = Field(..., description="Primary error message")
    details: list[ErrorDetail] | None = Field(
        default=None, description="Detailed error information (for validation errors)"
    )
    remediation: str | None = Field(default=None, description="Suggestion for fixing the error")
    request_id: str | None = Field(default=None, description="Request ID for tracing")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Error timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "ValidationError",
                "message": "Request validation failed",
                "details": [
                    {
                        "code": "invalid_date_range",
                        "message": "start_to must not be before start_from",
                        "field": "query",
                        "value": None,
                    }
                ],
                "remediation": "Pick an end date on or after the start date",
                "request_id": "req_1234567890",
                "timestamp": "2025-07-15T10:30:00Z",
            }
        }
    )


class ErrorCode:
    """Standard error codes used across the API."""

    # Validation errors (400/422)
    VALIDATION_ERROR = "validation_error"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    INVALID_DATE = "invalid_date"
    INVALID_DATE_RANGE = "invalid_date_range"
    INVALID_INTERVAL = "invalid_interval"

    # Not found / empty (404)
    NO_DATA_TO_EXPORT = "no_data_to_export"

    # Service state (503)
    CONTROLLER_UNAVAILABLE = "controller_unavailable"

    # Internal errors (500)
    EXPORT_FAILED = "export_failed"
    INTERNAL_ERROR = "internal_error"


REMEDIATION_HINTS = {
    ErrorCode.INVALID_DATE: "Use ISO 8601 dates (YYYY-MM-DD)",
    ErrorCode.INVALID_DATE_RANGE: "Pick an end date on or after the start date",
    ErrorCode.INVALID_INTERVAL: "Polling interval must be a positive number of milliseconds",
    ErrorCode.NO_DATA_TO_EXPORT: "Widen the search or date filter so at least one campaign matches",
    ErrorCode.CONTROLLER_UNAVAILABLE: "The metrics poller is shutting down. Retry after the service restarts.",
    ErrorCode.EXPORT_FAILED: "Report rendering failed. Try the CSV export instead.",
}
