"""
CoverScan API

FastAPI application: cover text recognition and ISBN lookup.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from fastapi import FastAPI, Request

from coverscan.api.dependencies import (
    ServiceContainer,
    Settings,
    get_service_container,
    get_settings,
    init_services,
)
from coverscan.api.middleware import LoggingConfig, setup_exception_handlers, setup_logging
from coverscan.api.routes import books_router, recognition_router
from coverscan.api.schemas import HealthResponse

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"
API_PREFIX = "/api/v1"


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build services at startup; a bad lexicon file fails here, not on first request."""
    settings = get_settings()
    logger.info(
        f"Starting CoverScan ({settings.environment}): "
        f"{settings.results_per_query} results/query, cap {settings.max_results}, "
        f"timeout {settings.query_timeout_seconds}s, concurrency {settings.search_concurrency}"
    )

    services = init_services(settings)
    _ = services.extractor
    app.state.services = services

    try:
        yield
    finally:
        logger.info("CoverScan stopped")


def _component_status(services: ServiceContainer) -> dict[str, str]:
    settings = services.settings
    return {
        "extractor": "loaded" if services._extractor is not None else "not_loaded",
        "lexicon": settings.lexicon_path or "built-in",
        "google_books_api": "configured" if settings.google_books_api_key else "not_configured",
    }


# =============================================================================
# Application Factory
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="CoverScan",
        description="Identify books from the text on their covers.",
        version=VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_logging(app, LoggingConfig(), structured=settings.environment != "development")
    setup_exception_handlers(app)

    app.include_router(recognition_router, prefix=API_PREFIX)
    app.include_router(books_router, prefix=API_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": "CoverScan",
            "version": VERSION,
            "endpoints": [f"{API_PREFIX}/recognize", f"{API_PREFIX}/books/isbn/{{isbn}}"],
        }

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check(request: Request) -> HealthResponse:
        """Liveness plus a summary of how recognition is configured."""
        services = getattr(request.app.state, "services", None) or get_service_container()
        return HealthResponse(
            status="healthy",
            version=VERSION,
            components=_component_status(services),
        )

    return app


app = create_app()


def main():
    """Run the application using uvicorn."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "coverscan.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
