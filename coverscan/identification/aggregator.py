"""
Result Aggregator

Runs every planned query against a book search provider, merges the
results in query-priority order, removes duplicates and, when candidates
are available, ranks the merged list.

Queries are fetched concurrently but merged in the order they were
planned, so the result never depends on network completion order.
"""

import asyncio
from typing import Optional, Sequence

from loguru import logger

from coverscan.identification.candidate_ranker import CandidateRanker
from coverscan.identification.google_books import BookRecord, BookSearchProvider
from coverscan.recognition.text_parser import CandidateSet


DEFAULT_RESULTS_PER_QUERY = 5
DEFAULT_QUERY_TIMEOUT = 5.0
DEFAULT_CONCURRENCY = 4


class ResultAggregator:
    """
    Multi-query search with dedup and relevance ranking.

    Usage:
        aggregator = ResultAggregator(GoogleBooksClient())
        books = await aggregator.search(queries, max_total=8, candidates=candidates)
    """

    def __init__(
        self,
        provider: BookSearchProvider,
        ranker: Optional[CandidateRanker] = None,
        results_per_query: int = DEFAULT_RESULTS_PER_QUERY,
        query_timeout: Optional[float] = DEFAULT_QUERY_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        """
        Initialize aggregator.

        Args:
            provider: External book search provider
            ranker: Ranker used when candidates are supplied
            results_per_query: Result count requested per query
            query_timeout: Seconds before a single query counts as failed
                (None disables the timeout)
            concurrency: Maximum queries in flight at once
        """
        self.provider = provider
        self.ranker = ranker or CandidateRanker()
        self.results_per_query = results_per_query
        self.query_timeout = query_timeout
        self.concurrency = max(1, concurrency)

    async def search(
        self,
        queries: Sequence[str],
        max_total: int,
        candidates: Optional[CandidateSet] = None,
    ) -> list[BookRecord]:
        """
        Search with every query and return merged, ranked results.

        Args:
            queries: Queries in priority order
            max_total: Cap on returned records
            candidates: Extracted candidates; enables ranking when non-empty

        Returns:
            At most ``max_total`` records, unique by (title, author)
        """
        if max_total <= 0 or not queries:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)
        batches = await asyncio.gather(
            *(self._run_query(query, semaphore) for query in queries)
        )

        merged = self.merge(batches)

        if candidates is None or candidates.is_empty:
            return merged[:max_total]

        return self.ranker.rank(merged, candidates)[:max_total]

    @staticmethod
    def merge(batches: Sequence[Sequence[BookRecord]]) -> list[BookRecord]:
        """Concatenate batches in order, keeping the first of each (title, author)."""
        seen: set[str] = set()
        merged: list[BookRecord] = []

        for batch in batches:
            for record in batch:
                key = record.dedup_key
                if key in seen:
                    continue
                seen.add(key)
                merged.append(record)

        return merged

    async def _run_query(self, query: str, semaphore: asyncio.Semaphore) -> list[BookRecord]:
        """Run one query; any failure counts as zero results."""
        async with semaphore:
            logger.info(f"Searching for books with query: '{query}'")
            try:
                if self.query_timeout is None:
                    results = await self.provider.search(query, self.results_per_query)
                else:
                    results = await asyncio.wait_for(
                        self.provider.search(query, self.results_per_query),
                        timeout=self.query_timeout,
                    )
            except asyncio.TimeoutError:
                logger.warning(f"Search timed out after {self.query_timeout}s for query '{query}'")
                return []
            except Exception as e:
                logger.warning(f"Search failed for query '{query}': {type(e).__name__}: {e}")
                return []

        return list(results or [])
