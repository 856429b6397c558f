"""
Dependency injection for FastAPI routes.

Settings come from the environment (after ``load_dotenv``); services are
built lazily on first use and shared for the life of the process.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from fastapi import Depends


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class Settings:
    """Runtime configuration for recognition and the HTTP layer."""

    # Google Books
    google_books_api_key: Optional[str] = None

    # Search fan-out
    results_per_query: int = 5
    max_results: int = 8
    query_timeout_seconds: float = 5.0
    search_concurrency: int = 4

    # YAML file overriding the heuristic word lists
    lexicon_path: Optional[str] = None

    environment: str = "development"
    debug: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Read every setting from its environment variable, falling back to the defaults."""
        return cls(
            google_books_api_key=os.getenv("GOOGLE_BOOKS_API_KEY") or None,
            results_per_query=int(os.getenv("RESULTS_PER_QUERY", cls.results_per_query)),
            max_results=int(os.getenv("MAX_RESULTS", cls.max_results)),
            query_timeout_seconds=float(os.getenv("QUERY_TIMEOUT_SECONDS", cls.query_timeout_seconds)),
            search_concurrency=int(os.getenv("SEARCH_CONCURRENCY", cls.search_concurrency)),
            lexicon_path=os.getenv("COVERSCAN_LEXICON_PATH") or None,
            environment=os.getenv("COVERSCAN_ENV", cls.environment),
            debug=os.getenv("DEBUG", "true").lower() == "true",
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


# =============================================================================
# Services
# =============================================================================

class ServiceContainer:
    """
    Lazily built recognition services.

    The provider, extractor and recognition service are each created on
    first access and then reused.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._book_provider = None
        self._extractor = None
        self._recognition_service = None

    @property
    def book_provider(self):
        if self._book_provider is None:
            from coverscan.identification.google_books import GoogleBooksClient
            self._book_provider = GoogleBooksClient(api_key=self.settings.google_books_api_key)
        return self._book_provider

    @property
    def extractor(self):
        if self._extractor is None:
            from coverscan.recognition.lexicon import load_lexicon
            from coverscan.recognition.text_parser import CandidateExtractor
            self._extractor = CandidateExtractor(lexicon=load_lexicon(self.settings.lexicon_path))
        return self._extractor

    @property
    def recognition_service(self):
        if self._recognition_service is None:
            from coverscan.identification.aggregator import ResultAggregator
            from coverscan.identification.service import CoverRecognitionService

            self._recognition_service = CoverRecognitionService(
                extractor=self.extractor,
                aggregator=ResultAggregator(
                    provider=self.book_provider,
                    results_per_query=self.settings.results_per_query,
                    query_timeout=self.settings.query_timeout_seconds,
                    concurrency=self.settings.search_concurrency,
                ),
            )
        return self._recognition_service


_service_container: Optional[ServiceContainer] = None


def init_services(settings: Settings) -> ServiceContainer:
    """Replace the process-wide container."""
    global _service_container
    _service_container = ServiceContainer(settings)
    return _service_container


def get_service_container() -> ServiceContainer:
    """Process-wide container, created from the environment on first use."""
    if _service_container is None:
        return init_services(get_settings())
    return _service_container


# =============================================================================
# Route Dependencies
# =============================================================================

def get_recognition_service(
    container: ServiceContainer = Depends(get_service_container),
):
    return container.recognition_service


def get_book_provider(
    container: ServiceContainer = Depends(get_service_container),
):
    return container.book_provider
