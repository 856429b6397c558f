"""
CoverScan HTTP API.

Thin FastAPI layer over the recognition core:
- POST /api/v1/recognize
- GET /api/v1/books/isbn/{isbn}
- GET /health
"""

from coverscan.api.main import app, create_app, main
from coverscan.api.dependencies import (
    ServiceContainer,
    Settings,
    get_book_provider,
    get_recognition_service,
    get_service_container,
    get_settings,
)

__all__ = [
    "app",
    "create_app",
    "main",
    "ServiceContainer",
    "Settings",
    "get_book_provider",
    "get_recognition_service",
    "get_service_container",
    "get_settings",
]
