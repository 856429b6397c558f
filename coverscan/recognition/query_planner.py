"""
Search Query Planner

Builds the ordered list of book-search queries for a CandidateSet.
Most specific first:
1. Every title x author combination
2. Each title alone
3. Each author alone
"""

from typing import Iterator

from loguru import logger

from coverscan.recognition.text_normalizer import comparison_key
from coverscan.recognition.text_parser import CandidateSet


MAX_QUERIES = 6


class QueryPlanner:
    """
    Plan search queries from extracted candidates.

    Usage:
        planner = QueryPlanner()
        planner.plan(CandidateSet(("Sleeping Murder",), ("Agatha Christie",)))
        # ["Sleeping Murder Agatha Christie", "Sleeping Murder", "Agatha Christie"]
    """

    def __init__(self, max_queries: int = MAX_QUERIES):
        self.max_queries = max_queries

    def plan(self, candidates: CandidateSet) -> list[str]:
        """
        Generate deduplicated queries in priority order.

        Args:
            candidates: Extracted title/author candidates

        Returns:
            Up to ``max_queries`` non-empty queries, unique ignoring case
            and whitespace
        """
        queries: list[str] = []
        seen: set[str] = set()

        for query in self._iter_queries(candidates):
            key = comparison_key(query)
            if not key or key in seen:
                continue
            seen.add(key)
            queries.append(" ".join(query.split()))
            if len(queries) >= self.max_queries:
                break

        logger.debug(f"Planned {len(queries)} search queries")
        return queries

    @staticmethod
    def _iter_queries(candidates: CandidateSet) -> Iterator[str]:
        for title in candidates.title_candidates:
            for author in candidates.author_candidates:
                yield f"{title} {author}"

        yield from candidates.title_candidates
        yield from candidates.author_candidates


def generate_search_queries(candidates: CandidateSet, max_queries: int = MAX_QUERIES) -> list[str]:
    """Plan queries with a default QueryPlanner."""
    return QueryPlanner(max_queries=max_queries).plan(candidates)
