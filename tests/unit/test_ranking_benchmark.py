"""
Unit tests for the ranking benchmark.
"""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from coverscan.evaluation.ranking_benchmark import (
    BenchmarkCase,
    CaseResult,
    RankingBenchmark,
    find_matching_position,
)
from coverscan.identification.service import RecognitionResult
from coverscan.recognition.text_parser import CandidateSet

from tests.conftest import make_book


def case(title: str = "Sleeping Murder", author: str = "Agatha Christie") -> BenchmarkCase:
    return BenchmarkCase(name=title.lower(), raw_text=title.upper(), expected_title=title, expected_author=author)


class TestCaseResult:

    @pytest.mark.parametrize("position,score,rr", [
        (0, 100, 1.0),
        (1, 90, 0.5),
        (3, 70, 0.25),
        (12, 0, 1 / 13),
        (None, 0, 0.0),
    ])
    def test_position_score(self, position, score, rr):
        result = CaseResult(case=case(), position=position)

        assert result.score == score
        assert result.reciprocal_rank == pytest.approx(rr)

    def test_needs_improvement(self):
        assert not CaseResult(case=case(), position=2).needs_improvement
        assert CaseResult(case=case(), position=3).needs_improvement
        assert CaseResult(case=case(), position=None).needs_improvement


class TestMatching:

    def test_substring_match_on_title_and_author(self):
        books = [
            make_book("The Body in the Library", "Agatha Christie"),
            make_book("Sleeping Murder: Miss Marple's Last Case", "Agatha Christie"),
        ]

        assert find_matching_position(books, "sleeping murder", "christie") == 1

    def test_requires_both_fields(self):
        books = [make_book("Sleeping Murder", "Someone Else")]

        assert find_matching_position(books, "Sleeping Murder", "Agatha Christie") is None


class TestMetrics:

    def test_compute_metrics(self):
        results = [
            CaseResult(case=case(), position=0),
            CaseResult(case=case(), position=2),
            CaseResult(case=case(), position=None),
            CaseResult(case=case(), error="boom"),
        ]

        metrics = RankingBenchmark.compute_metrics(results)

        assert metrics.total_cases == 4
        assert metrics.cases_found == 2
        assert metrics.errors == 1
        assert metrics.average_score == pytest.approx((100 + 80) / 4)
        assert metrics.hit_rate_at_1 == pytest.approx(0.25)
        assert metrics.hit_rate_at_3 == pytest.approx(0.5)
        assert metrics.mrr == pytest.approx((1 + 1 / 3) / 4)

    def test_empty_results(self):
        metrics = RankingBenchmark.compute_metrics([])

        assert metrics.total_cases == 0
        assert metrics.to_dict()["mrr"] == 0.0


@pytest.mark.asyncio
class TestRankingBenchmark:
    """Tests for running cases through a recognition service."""

    @pytest.fixture
    def service(self):
        service = MagicMock()
        service.recognize = AsyncMock(side_effect=[
            RecognitionResult(
                raw_text="SLEEPING\nMURDER",
                candidates=CandidateSet(("SLEEPING MURDER",), ()),
                search_queries=["SLEEPING MURDER"],
                books=[
                    make_book("Sleeping Murder", "Agatha Christie"),
                    make_book("Murder Is Easy", "Agatha Christie"),
                ],
            ),
            RecognitionResult(
                raw_text="DUNE",
                candidates=CandidateSet(("DUNE",), ()),
                search_queries=["DUNE"],
                books=[make_book("Dune Messiah", "Frank Herbert")] * 4,
            ),
            RuntimeError("provider exploded"),
        ])
        return service

    async def test_run(self, service):
        benchmark = RankingBenchmark(service, max_results=5)
        benchmark.add_case("sleeping", "SLEEPING\nMURDER", "Sleeping Murder", "Agatha Christie")
        benchmark.add_case("dune", "DUNE", "Emma", "Jane Austen")
        benchmark.add_case("broken", "???", "Ulysses", "James Joyce")

        results = await benchmark.run()

        assert [r.position for r in results] == [0, None, None]
        assert results[0].returned == 2
        assert results[1].search_queries == ["DUNE"]
        assert results[2].error == "provider exploded"
        service.recognize.assert_any_await("SLEEPING\nMURDER", 5)

    async def test_report(self, service):
        benchmark = RankingBenchmark(service)
        benchmark.add_case("sleeping", "SLEEPING\nMURDER", "Sleeping Murder", "Agatha Christie")
        benchmark.add_case("dune", "DUNE", "Emma", "Jane Austen")
        benchmark.add_case("broken", "???", "Ulysses", "James Joyce")

        report = benchmark.format_report(await benchmark.run())

        assert "=== RANKING BENCHMARK ===" in report
        assert "N/F" in report
        assert "ERR" in report
        assert "=== NEEDS IMPROVEMENT ===" in report
        assert "Emma (position: not found)" in report
        assert "Ulysses: ERROR - provider exploded" in report

    async def test_load_cases(self, tmp_path, service):
        path = tmp_path / "cases.json"
        path.write_text(json.dumps([
            {
                "name": "sleeping_murder",
                "raw_text": "SLEEPING\nMURDER\nAgatha Christie",
                "expected_title": "Sleeping Murder",
                "expected_author": "Agatha Christie",
            },
            {
                "raw_text": "DUNE",
                "expected_title": "Dune",
                "expected_author": "Frank Herbert",
            },
        ]), encoding="utf-8")

        benchmark = RankingBenchmark(service)
        benchmark.load_cases(path)

        assert [c.name for c in benchmark.cases] == ["sleeping_murder", "Dune"]
        assert benchmark.cases[0].raw_text == "SLEEPING\nMURDER\nAgatha Christie"
