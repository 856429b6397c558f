"""
Request logging middleware.

One log line per API call with method, path, status and duration. Each
call gets a short request id that is echoed back in a response header and
attached to every JSON log record written while the call is in flight.
"""

import json
import logging
import time
import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

logger = logging.getLogger("coverscan.api")


@dataclass
class LoggingConfig:
    """Request logging options."""

    enabled: bool = True

    # Probes and browser noise
    quiet_paths: FrozenSet[str] = field(default_factory=lambda: frozenset({"/health", "/favicon.ico"}))

    # A recognition call fans out to several provider searches
    slow_request_seconds: float = 5.0

    request_id_header: str = "X-Request-ID"


class StructuredLogFormatter(logging.Formatter):
    """Render records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            payload["request_id"] = request_id

        for key in ("duration_ms", "status_code", "path"):
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload)


def get_request_id() -> str:
    """Request id of the call being handled, or an empty string."""
    return request_id_var.get()


def _level_for(status_code: int, slow: bool) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400 or slow:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Time each request and log its outcome."""

    def __init__(self, app: FastAPI, config: Optional[LoggingConfig] = None):
        super().__init__(app)
        self.config = config or LoggingConfig()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        header = self.config.request_id_header
        request_id = request.headers.get(header) or uuid.uuid4().hex[:8]
        request_id_var.set(request_id)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        response.headers[header] = request_id

        path = request.url.path
        if not self.config.enabled or path in self.config.quiet_paths:
            return response

        slow = elapsed > self.config.slow_request_seconds
        duration_ms = round(elapsed * 1000, 2)
        message = f"{request.method} {path} -> {response.status_code} ({duration_ms}ms)"

        logger.log(
            _level_for(response.status_code, slow),
            f"[SLOW] {message}" if slow else message,
            extra={"duration_ms": duration_ms, "status_code": response.status_code, "path": path},
        )
        return response


def setup_logging(
    app: FastAPI,
    config: Optional[LoggingConfig] = None,
    structured: bool = True,
) -> None:
    """
    Install the request logging middleware.

    Args:
        app: FastAPI application instance.
        config: Logging options.
        structured: Emit JSON lines from the ``coverscan`` logger tree.
    """
    package_logger = logging.getLogger("coverscan")
    has_json_handler = any(
        isinstance(handler.formatter, StructuredLogFormatter)
        for handler in package_logger.handlers
    )

    if structured and not has_json_handler:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredLogFormatter())
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.INFO)

    app.add_middleware(RequestLoggingMiddleware, config=config or LoggingConfig())
