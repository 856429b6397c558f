"""
Cover Recognition Service

Runs book identification from cover OCR text:
raw text -> candidates -> search queries -> ranked book records.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

from coverscan.identification.aggregator import ResultAggregator
from coverscan.identification.google_books import BookRecord, BookSearchProvider, GoogleBooksClient
from coverscan.recognition.query_planner import QueryPlanner
from coverscan.recognition.text_parser import CandidateExtractor, CandidateSet


DEFAULT_MAX_RESULTS = 8


@dataclass
class RecognitionResult:
    """Outcome of recognizing one cover."""

    raw_text: str
    candidates: CandidateSet
    search_queries: list[str] = field(default_factory=list)
    books: list[BookRecord] = field(default_factory=list)

    @property
    def best_match(self) -> Optional[BookRecord]:
        if self.books:
            return self.books[0]
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rawText": self.raw_text,
            "candidates": self.candidates.to_dict(),
            "searchQueries": list(self.search_queries),
            "books": [book.to_dict() for book in self.books],
        }


class CoverRecognitionService:
    """Service for identifying books from cover OCR text."""

    def __init__(
        self,
        provider: Optional[BookSearchProvider] = None,
        extractor: Optional[CandidateExtractor] = None,
        planner: Optional[QueryPlanner] = None,
        aggregator: Optional[ResultAggregator] = None,
    ):
        """
        Initialize service.

        Args:
            provider: Book search provider (Google Books by default)
            extractor: Candidate extractor
            planner: Query planner
            aggregator: Result aggregator; built around ``provider`` if omitted
        """
        self.extractor = extractor or CandidateExtractor()
        self.planner = planner or QueryPlanner()
        if aggregator is None:
            aggregator = ResultAggregator(provider or GoogleBooksClient())
        self.aggregator = aggregator

    @property
    def provider(self) -> BookSearchProvider:
        return self.aggregator.provider

    async def recognize(self, raw_text: str, max_results: int = DEFAULT_MAX_RESULTS) -> RecognitionResult:
        """
        Identify a book from cover OCR text.

        Blank text and zero search hits are valid outcomes and produce
        empty lists rather than errors.

        Args:
            raw_text: Text recognised on the cover
            max_results: Cap on returned books

        Returns:
            RecognitionResult with candidates, queries and ranked books
        """
        raw_text = raw_text or ""
        candidates = self.extractor.extract(raw_text)
        queries = self.planner.plan(candidates)

        if not queries:
            logger.info("No search queries could be built from the cover text")
            return RecognitionResult(raw_text=raw_text, candidates=candidates)

        books = await self.aggregator.search(queries, max_results, candidates)

        if books:
            logger.info(f"Identified '{books[0].title}' by '{books[0].author}' ({len(books)} results)")
        else:
            logger.info("No results found")

        return RecognitionResult(
            raw_text=raw_text,
            candidates=candidates,
            search_queries=queries,
            books=books,
        )
