"""
Pytest configuration and fixtures for CoverScan tests.
"""

import asyncio
import sys
from pathlib import Path
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from coverscan.api.main import create_app
from coverscan.api.dependencies import Settings, get_book_provider, get_recognition_service, get_settings
from coverscan.identification.aggregator import ResultAggregator
from coverscan.identification.google_books import BookRecord, BookSearchProvider
from coverscan.identification.service import CoverRecognitionService
from coverscan.recognition.text_normalizer import comparison_key


# =============================================================================
# Fake Provider
# =============================================================================

class FakeBookProvider(BookSearchProvider):
    """
    In-memory book search provider.

    Serves canned records per query (matched ignoring case and extra
    whitespace). Individual queries can be made to raise or to stall.
    """

    def __init__(
        self,
        responses: Optional[dict[str, list[BookRecord]]] = None,
        errors: Optional[dict[str, Exception]] = None,
        delays: Optional[dict[str, float]] = None,
    ):
        self.responses = {comparison_key(k): v for k, v in (responses or {}).items()}
        self.errors = {comparison_key(k): v for k, v in (errors or {}).items()}
        self.delays = {comparison_key(k): v for k, v in (delays or {}).items()}
        self.calls: list[tuple[str, int]] = []

    async def search(self, query: str, max_results: int = 5) -> list[BookRecord]:
        self.calls.append((query, max_results))
        key = comparison_key(query)

        if key in self.delays:
            await asyncio.sleep(self.delays[key])
        if key in self.errors:
            raise self.errors[key]

        return list(self.responses.get(key, []))[:max_results]

    @property
    def queries(self) -> list[str]:
        return [query for query, _ in self.calls]


def make_book(title: str, author: str, **kwargs) -> BookRecord:
    """Build a BookRecord with a stable fake volume id."""
    kwargs.setdefault("google_books_id", f"id-{title.lower().replace(' ', '-')}")
    return BookRecord(title=title, author=author, **kwargs)


# =============================================================================
# Test Settings
# =============================================================================

def get_test_settings() -> Settings:
    """Return settings configured for testing."""
    return Settings(
        google_books_api_key=None,
        results_per_query=5,
        max_results=8,
        query_timeout_seconds=1.0,
        search_concurrency=4,
        environment="test",
        debug=True,
    )


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def sleeping_murder() -> BookRecord:
    return make_book(
        "Sleeping Murder",
        "Agatha Christie",
        publish_year=1976,
        publisher="Collins Crime Club",
        page_count=224,
        isbn="9780062073655",
    )


@pytest.fixture
def body_in_library() -> BookRecord:
    return make_book("The Body in the Library", "Agatha Christie", publish_year=1942)


@pytest.fixture
def unrelated_book() -> BookRecord:
    return make_book("Gone Girl", "Gillian Flynn", publish_year=2012)


@pytest.fixture
def great_gatsby() -> BookRecord:
    return make_book(
        "The Great Gatsby",
        "F. Scott Fitzgerald",
        publish_year=1925,
        publisher="Scribner",
        page_count=180,
        isbn="9780743273565",
    )


# =============================================================================
# Provider / Service Fixtures
# =============================================================================

@pytest.fixture
def fake_provider(sleeping_murder, body_in_library, unrelated_book, great_gatsby) -> FakeBookProvider:
    """Provider that knows the Sleeping Murder cover and one ISBN."""
    return FakeBookProvider(responses={
        # Provider ranking deliberately puts the right book last
        "SLEEPING MURDER Agatha Christie": [unrelated_book, body_in_library, sleeping_murder],
        "SLEEPING MURDER": [sleeping_murder],
        "Agatha Christie": [body_in_library, sleeping_murder],
        "isbn:9780743273565": [great_gatsby],
    })


@pytest.fixture
def recognition_service(fake_provider) -> CoverRecognitionService:
    aggregator = ResultAggregator(fake_provider, query_timeout=1.0)
    return CoverRecognitionService(aggregator=aggregator)


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def app(fake_provider, recognition_service):
    """Create FastAPI application for testing."""
    application = create_app(get_test_settings())

    # Override dependencies
    application.dependency_overrides[get_settings] = get_test_settings
    application.dependency_overrides[get_recognition_service] = lambda: recognition_service
    application.dependency_overrides[get_book_provider] = lambda: fake_provider

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
