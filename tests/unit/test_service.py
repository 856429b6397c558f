"""
Unit tests for the cover recognition service.
"""

import pytest

from coverscan.identification.aggregator import ResultAggregator
from coverscan.identification.google_books import BookSearchError
from coverscan.identification.service import CoverRecognitionService, RecognitionResult
from coverscan.recognition.text_parser import CandidateSet

from tests.conftest import FakeBookProvider


@pytest.mark.asyncio
class TestCoverRecognitionService:
    """Tests for CoverRecognitionService.recognize."""

    async def test_sleeping_murder_end_to_end(self, recognition_service, fake_provider):
        result = await recognition_service.recognize("SLEEPING\nMURDER\nAgatha Christie")

        assert result.candidates.title_candidates[0] == "SLEEPING MURDER"
        assert result.candidates.author_candidates == ("Agatha Christie",)
        assert result.search_queries[0] == "SLEEPING MURDER Agatha Christie"
        assert result.books[0].title == "Sleeping Murder"
        assert result.best_match.author == "Agatha Christie"
        assert set(fake_provider.queries) == set(result.search_queries)

    async def test_books_are_unique_and_capped(self, recognition_service):
        result = await recognition_service.recognize("SLEEPING\nMURDER\nAgatha Christie", max_results=2)

        assert len(result.books) == 2
        keys = [b.dedup_key for b in result.books]
        assert len(keys) == len(set(keys))

    async def test_blank_text_is_no_match(self, recognition_service, fake_provider):
        result = await recognition_service.recognize("   \n  ")

        assert result.candidates == CandidateSet()
        assert result.search_queries == []
        assert result.books == []
        assert result.best_match is None
        assert fake_provider.calls == []

    async def test_provider_failure_gives_empty_books(self):
        provider = FakeBookProvider(errors={
            "SLEEPING MURDER Agatha Christie": BookSearchError("down"),
            "SLEEPING MURDER": BookSearchError("down"),
            "Agatha Christie": BookSearchError("down"),
        })
        service = CoverRecognitionService(aggregator=ResultAggregator(provider))

        result = await service.recognize("SLEEPING\nMURDER\nAgatha Christie")

        assert result.search_queries
        assert result.books == []

    async def test_provider_property(self, fake_provider):
        service = CoverRecognitionService(fake_provider)

        assert service.provider is fake_provider

    async def test_to_dict(self, recognition_service):
        result = await recognition_service.recognize("SLEEPING\nMURDER\nAgatha Christie", max_results=1)

        data = result.to_dict()

        assert data["rawText"] == "SLEEPING\nMURDER\nAgatha Christie"
        assert data["candidates"]["authorCandidates"] == ["Agatha Christie"]
        assert data["searchQueries"] == result.search_queries
        assert data["books"][0]["title"] == "Sleeping Murder"
        assert "score" not in data["books"][0]


class TestRecognitionResult:

    def test_empty_result(self):
        result = RecognitionResult(raw_text="", candidates=CandidateSet())

        assert result.to_dict() == {
            "rawText": "",
            "candidates": {"titleCandidates": [], "authorCandidates": []},
            "searchQueries": [],
            "books": [],
        }
