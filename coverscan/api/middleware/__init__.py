"""
Cross-cutting API concerns: domain error responses and request logging.
"""

from coverscan.api.middleware.error_handler import (
    CoverScanException,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
    create_error_response,
    setup_exception_handlers,
)
from coverscan.api.middleware.logging import (
    LoggingConfig,
    RequestLoggingMiddleware,
    StructuredLogFormatter,
    get_request_id,
    setup_logging,
)

__all__ = [
    "CoverScanException",
    "ExternalServiceError",
    "NotFoundError",
    "ValidationError",
    "create_error_response",
    "setup_exception_handlers",
    "LoggingConfig",
    "RequestLoggingMiddleware",
    "StructuredLogFormatter",
    "get_request_id",
    "setup_logging",
]
