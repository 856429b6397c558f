"""
Candidate Ranker for CoverScan

Scores merged search results against the title/author candidates that
were extracted from the cover, and orders them best first.

Scoring (additive, case-insensitive, summed over every candidate):
- Title exact match: +100, substring either way: +50,
  otherwise +20 if any candidate word longer than 3 chars is in the title
- Author exact match: +80, substring either way: +40,
  otherwise +15 per candidate word longer than 2 chars found in the author

Scores are only used for ordering; they are not probabilities.
"""

from dataclasses import dataclass
from typing import Sequence

from loguru import logger

from coverscan.identification.google_books import BookRecord
from coverscan.recognition.text_parser import CandidateSet


TITLE_EXACT = 100
TITLE_SUBSTRING = 50
TITLE_WORD = 20
TITLE_WORD_MIN_LENGTH = 4

AUTHOR_EXACT = 80
AUTHOR_SUBSTRING = 40
AUTHOR_WORD = 15
AUTHOR_WORD_MIN_LENGTH = 3


@dataclass(frozen=True)
class ScoredBookRecord:
    """A record with its transient ranking score. Never serialized."""

    record: BookRecord
    score: int
    arrival_index: int


def score_title(record_title: str, title_candidates: Sequence[str]) -> int:
    """Title component of the relevance score."""
    title = record_title.lower()
    if not title:
        return 0

    total = 0
    for candidate in title_candidates:
        candidate = candidate.lower()
        if not candidate:
            continue
        if title == candidate:
            total += TITLE_EXACT
        elif candidate in title or title in candidate:
            total += TITLE_SUBSTRING
        elif any(
            len(word) >= TITLE_WORD_MIN_LENGTH and word in title
            for word in candidate.split()
        ):
            total += TITLE_WORD
    return total


def score_author(record_author: str, author_candidates: Sequence[str]) -> int:
    """Author component of the relevance score."""
    author = record_author.lower()
    if not author:
        return 0

    total = 0
    for candidate in author_candidates:
        candidate = candidate.lower()
        if not candidate:
            continue
        if author == candidate:
            total += AUTHOR_EXACT
        elif candidate in author or author in candidate:
            total += AUTHOR_SUBSTRING
        else:
            total += AUTHOR_WORD * sum(
                1 for word in candidate.split()
                if len(word) >= AUTHOR_WORD_MIN_LENGTH and word in author
            )
    return total


def score_record(record: BookRecord, candidates: CandidateSet) -> int:
    """
    Score how well a search result matches the extracted candidates.

    Args:
        record: Book returned by the search provider
        candidates: Candidates extracted from the cover

    Returns:
        Non-negative score, higher is better
    """
    return (
        score_title(record.title, candidates.title_candidates)
        + score_author(record.author, candidates.author_candidates)
    )


class CandidateRanker:
    """
    Orders search results by similarity to extracted candidates.

    Usage:
        ranker = CandidateRanker()
        books = ranker.rank(records, candidates)
        books[0].title
    """

    def score(self, records: Sequence[BookRecord], candidates: CandidateSet) -> list[ScoredBookRecord]:
        """Score records in arrival order."""
        return [
            ScoredBookRecord(record=record, score=score_record(record, candidates), arrival_index=i)
            for i, record in enumerate(records)
        ]

    def rank(self, records: Sequence[BookRecord], candidates: CandidateSet) -> list[BookRecord]:
        """
        Sort records best match first.

        Ties keep arrival order. The returned records carry no score.

        Args:
            records: Deduplicated records in query-priority order
            candidates: Candidates extracted from the cover

        Returns:
            Reordered BookRecord list
        """
        scored = self.score(records, candidates)
        scored.sort(key=lambda s: (-s.score, s.arrival_index))

        if scored:
            best = scored[0]
            logger.debug(
                f"Top match '{best.record.title}' by '{best.record.author}' "
                f"(score {best.score}, arrived #{best.arrival_index + 1})"
            )

        return [s.record for s in scored]
