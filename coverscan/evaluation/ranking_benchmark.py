"""
Ranking Benchmark Module

Measures how well cover recognition ranks the correct book:
- Position of the expected book in the returned list
- Position score (100 at rank 1, minus 10 per position below)
- Hit rate @1 / @3
- Mean Reciprocal Rank (MRR)
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np

from coverscan.identification.google_books import BookRecord
from coverscan.identification.service import CoverRecognitionService

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkCase:
    """One cover with its ground truth."""
    name: str
    raw_text: str
    expected_title: str
    expected_author: str


@dataclass
class CaseResult:
    """Outcome of one benchmark case."""
    case: BenchmarkCase
    position: Optional[int] = None  # 0-based, None when not found
    returned: int = 0
    search_queries: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.position is not None

    @property
    def score(self) -> int:
        """100 for first place, 10 less per position, 0 when missing."""
        if self.position is None:
            return 0
        return max(0, 100 - self.position * 10)

    @property
    def reciprocal_rank(self) -> float:
        if self.position is None:
            return 0.0
        return 1.0 / (self.position + 1)

    @property
    def needs_improvement(self) -> bool:
        return self.position is None or self.position > 2


@dataclass
class RankingMetrics:
    """Aggregate ranking metrics."""
    average_score: float = 0.0
    hit_rate_at_1: float = 0.0
    hit_rate_at_3: float = 0.0
    mrr: float = 0.0
    total_cases: int = 0
    cases_found: int = 0
    errors: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "average_score": round(self.average_score, 2),
            "hit_rate": {
                "hr@1": round(self.hit_rate_at_1, 4),
                "hr@3": round(self.hit_rate_at_3, 4),
            },
            "mrr": round(self.mrr, 4),
            "total_cases": self.total_cases,
            "cases_found": self.cases_found,
            "errors": self.errors,
        }


def find_matching_position(
    books: Sequence[BookRecord],
    expected_title: str,
    expected_author: str,
) -> Optional[int]:
    """Index of the first book whose title and author contain the expected values."""
    title = expected_title.lower()
    author = expected_author.lower()
    for i, book in enumerate(books):
        if title in book.title.lower() and author in book.author.lower():
            return i
    return None


class RankingBenchmark:
    """
    Benchmark the recognition pipeline against known covers.

    Usage:
        benchmark = RankingBenchmark(service)
        benchmark.load_cases(Path("covers.json"))
        results = await benchmark.run()
        print(benchmark.format_report(results))
    """

    def __init__(self, service: CoverRecognitionService, max_results: int = 8):
        self.service = service
        self.max_results = max_results
        self.cases: list[BenchmarkCase] = []

    def add_case(
        self,
        name: str,
        raw_text: str,
        expected_title: str,
        expected_author: str,
    ) -> None:
        self.cases.append(BenchmarkCase(name, raw_text, expected_title, expected_author))

    def load_cases(self, cases_file: Path) -> None:
        """
        Load benchmark cases from JSON.

        Expected format:
        [
            {
                "name": "sleeping_murder",
                "raw_text": "SLEEPING\\nMURDER\\nAgatha Christie",
                "expected_title": "Sleeping Murder",
                "expected_author": "Agatha Christie"
            },
            ...
        ]
        """
        with open(cases_file, encoding="utf-8") as f:
            data = json.load(f)

        for item in data:
            self.add_case(
                name=item.get("name") or item["expected_title"],
                raw_text=item["raw_text"],
                expected_title=item["expected_title"],
                expected_author=item["expected_author"],
            )

    async def run(self) -> list[CaseResult]:
        """Recognize every case; a failing case is recorded, not raised."""
        results = []
        for case in self.cases:
            try:
                recognition = await self.service.recognize(case.raw_text, self.max_results)
            except Exception as e:
                logger.error(f"Benchmark case {case.name} failed: {e}")
                results.append(CaseResult(case=case, error=str(e)))
                continue

            results.append(CaseResult(
                case=case,
                position=find_matching_position(
                    recognition.books, case.expected_title, case.expected_author
                ),
                returned=len(recognition.books),
                search_queries=recognition.search_queries,
            ))
        return results

    @staticmethod
    def compute_metrics(results: Sequence[CaseResult]) -> RankingMetrics:
        """Aggregate per-case results."""
        if not results:
            logger.warning("No benchmark results to evaluate")
            return RankingMetrics()

        positions = [r.position for r in results]
        return RankingMetrics(
            average_score=float(np.mean([r.score for r in results])),
            hit_rate_at_1=float(np.mean([p is not None and p < 1 for p in positions])),
            hit_rate_at_3=float(np.mean([p is not None and p < 3 for p in positions])),
            mrr=float(np.mean([r.reciprocal_rank for r in results])),
            total_cases=len(results),
            cases_found=sum(1 for r in results if r.found),
            errors=sum(1 for r in results if r.error),
        )

    def format_report(self, results: Sequence[CaseResult]) -> str:
        """Render a plain-text ranking table."""
        metrics = self.compute_metrics(results)
        lines = [
            "=== RANKING BENCHMARK ===",
            f"{'Book':<34}| Position | Score",
            f"{'-' * 34}|----------|------",
        ]

        for r in results:
            if r.error:
                position = "ERR"
            elif r.position is None:
                position = "N/F"
            else:
                position = str(r.position)
            lines.append(f"{r.case.expected_title:<34}|    {position:<5} | {r.score:>4}")

        lines.append(f"{'-' * 34}|----------|------")
        lines.append(f"{'AVERAGE':<34}|          | {metrics.average_score:>4.0f}")
        lines.append(f"MRR: {metrics.mrr:.3f}  hit@1: {metrics.hit_rate_at_1:.2f}  hit@3: {metrics.hit_rate_at_3:.2f}")

        failures = [r for r in results if r.needs_improvement]
        if failures:
            lines.append("")
            lines.append("=== NEEDS IMPROVEMENT ===")
            for r in failures:
                if r.error:
                    lines.append(f"{r.case.expected_title}: ERROR - {r.error}")
                else:
                    where = "not found" if r.position is None else r.position
                    lines.append(f"{r.case.expected_title} (position: {where})")
                    lines.append(f"  queries: {r.search_queries}")

        return "\n".join(lines)
