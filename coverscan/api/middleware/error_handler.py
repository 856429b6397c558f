"""
Error handling for the CoverScan API.

Domain errors raised from routes carry their own HTTP status and error
code; every error leaves the API as the same JSON shape:

    {"error": ..., "code": ..., "detail": ..., "timestamp": ...}
"""

import traceback
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from coverscan.identification.google_books import BookSearchError, RateLimitedError


class CoverScanException(Exception):
    """Base class for errors that map to an HTTP response."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class ValidationError(CoverScanException):
    """Request input passed schema validation but is still unusable (400)."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, detail=detail)


class NotFoundError(CoverScanException):
    """Lookup returned nothing (404)."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} not found",
            code="NOT_FOUND",
            status_code=404,
            detail=f"No {resource.lower()} matches '{identifier}'",
        )


class ExternalServiceError(CoverScanException):
    """The book search provider failed (503, or 429 when rate limited)."""

    def __init__(self, service: str, detail: Optional[str] = None, status_code: int = 503):
        super().__init__(
            f"{service} service unavailable",
            code="EXTERNAL_SERVICE_ERROR",
            status_code=status_code,
            detail=detail,
        )

    @classmethod
    def from_search_error(cls, error: BookSearchError, service: str = "Book search") -> "ExternalServiceError":
        status_code = 429 if isinstance(error, RateLimitedError) else 503
        return cls(service, detail=str(error), status_code=status_code)


def create_error_response(
    error: str,
    code: str,
    status_code: int,
    detail: Optional[str] = None,
) -> JSONResponse:
    """Build the JSON body shared by every error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "code": code,
            "detail": detail,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


def setup_exception_handlers(app):
    """Register exception handlers with FastAPI app."""

    @app.exception_handler(CoverScanException)
    async def coverscan_exception_handler(request: Request, exc: CoverScanException):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.code} - {exc.message}")
        return create_error_response(exc.message, exc.code, exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.url.path}: {exc}\n{traceback.format_exc()}"
        )
        return create_error_response(
            "Internal Server Error",
            "INTERNAL_ERROR",
            500,
            "An unexpected error occurred",
        )
