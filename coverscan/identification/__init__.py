"""
Book Identification Module

Searches external book databases with planned queries and ranks the
merged results against the extracted candidates.
"""

from coverscan.identification.google_books import (
    BookRecord,
    BookSearchProvider,
    BookSearchError,
    RateLimitedError,
    GoogleBooksClient,
)
from coverscan.identification.candidate_ranker import (
    CandidateRanker,
    ScoredBookRecord,
    score_record,
)
from coverscan.identification.aggregator import ResultAggregator
from coverscan.identification.service import (
    CoverRecognitionService,
    RecognitionResult,
)

__all__ = [
    # Provider
    "BookRecord",
    "BookSearchProvider",
    "BookSearchError",
    "RateLimitedError",
    "GoogleBooksClient",
    # Ranking
    "CandidateRanker",
    "ScoredBookRecord",
    "score_record",
    # Aggregation
    "ResultAggregator",
    # Service
    "CoverRecognitionService",
    "RecognitionResult",
]
