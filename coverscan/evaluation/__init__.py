"""
CoverScan Evaluation Module.

Ranking benchmark for cover recognition:
- Position score per cover
- Hit rate and Mean Reciprocal Rank
"""

from .ranking_benchmark import (
    BenchmarkCase,
    CaseResult,
    RankingMetrics,
    RankingBenchmark,
    find_matching_position,
)

__all__ = [
    "BenchmarkCase",
    "CaseResult",
    "RankingMetrics",
    "RankingBenchmark",
    "find_matching_position",
]
