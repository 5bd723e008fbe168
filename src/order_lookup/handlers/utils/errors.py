"""
Error taxonomy and error response helpers for the order lookup function.

Every failure the endpoint can report is a ``BaseServiceError`` subclass that
knows its HTTP status, its machine-ish ``error`` label and the user-facing
``message``. Internal details travel with the exception but only reach the
response body when the development flag is set.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from order_lookup.handlers.utils.observability import logger, metrics, tracer
from order_lookup.models.output import ErrorOutput


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    CONFIGURATION = "CONFIGURATION"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class BaseServiceError(Exception):
    """Base exception class for lookup errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error: str = "Internal server error",
        user_message: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.INFRASTRUCTURE,
        details: Optional[str] = None,
        debug: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error = error
        self.user_message = user_message or "An error occurred while processing your request. Please try again later."
        self.severity = severity
        self.category = category
        self.details = details
        self.debug = debug
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error": self.error,
            "status_code": self.status_code,
            "message": self.message,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "category": self.category.value,
            "details": self.details,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class InvalidInputError(BaseServiceError):
    """Raised when the request body is missing fields or malformed."""

    status_code = 400

    def __init__(self, message: str, error: str, user_message: str):
        super().__init__(
            message=message,
            error=error,
            user_message=user_message,
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
        )


class ConfigurationError(BaseServiceError):
    """Raised when upstream credentials are absent from the environment."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(
            message=message,
            error="Server configuration error",
            user_message="Service is not properly configured. Please contact support.",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            details=details,
        )


class UpstreamAuthError(BaseServiceError):
    """Raised when the upstream API rejects our credentials (401/403)."""

    status_code = 500

    def __init__(self, upstream_status: int):
        super().__init__(
            message=f"Shopify API authentication failed with status {upstream_status}",
            error="Authentication error",
            user_message="Service configuration error. Please contact support.",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.EXTERNAL_SERVICE,
        )
        self.upstream_status = upstream_status


class UpstreamError(BaseServiceError):
    """Raised on any other upstream failure: non-2xx, transport, bad payload."""

    status_code = 500

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(
            message=message,
            error="Internal server error",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
            details=message,
        )
        self.upstream_status = upstream_status


class OrderNotFoundError(BaseServiceError):
    """Raised when no upstream order matches both order number and email."""

    status_code = 404

    def __init__(self, user_message: str, debug: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="No upstream order matched order number and email",
            error="Order not found",
            user_message=user_message,
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
            debug=debug,
        )


class InternalError(BaseServiceError):
    """Catch-all for unexpected failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error="Internal server error",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.INFRASTRUCTURE,
            details=message,
        )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""
    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_label", error.error)
    tracer.put_annotation("error_category", error.category.value)
    tracer.put_metadata("error_details", error.to_dict())

    log = logger.warning if error.status_code < 500 else logger.error
    log(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_label": error.error,
            "status_code": error.status_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
            "error_message": error.message,
        },
    )


def format_error_response(
    error: BaseServiceError,
    include_details: bool = False,
) -> Dict[str, Any]:
    """Format error for API response."""
    output = ErrorOutput(
        error=error.error,
        message=error.user_message,
        details=(error.details or None) if include_details else None,
        debug=(error.debug or None) if include_details else None,
    )
    return output.model_dump(exclude_none=True)
