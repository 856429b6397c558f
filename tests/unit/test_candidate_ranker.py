"""
Unit tests for candidate-based result ranking.
"""

import pytest

from coverscan.identification.candidate_ranker import (
    CandidateRanker,
    ScoredBookRecord,
    score_author,
    score_record,
    score_title,
)
from coverscan.identification.google_books import BookRecord
from coverscan.recognition.text_parser import CandidateSet


def book(title: str, author: str) -> BookRecord:
    return BookRecord(google_books_id=None, title=title, author=author)


@pytest.fixture
def candidates():
    return CandidateSet(("Sleeping Murder",), ("Agatha Christie",))


class TestScoring:
    """Tests for the additive relevance score."""

    def test_exact_match_scores_at_least_180(self, candidates):
        assert score_record(book("Sleeping Murder", "Agatha Christie"), candidates) >= 180

    def test_unrelated_scores_zero(self, candidates):
        assert score_record(book("Gone Girl", "Gillian Flynn"), candidates) == 0

    def test_title_tiers(self):
        assert score_title("Sleeping Murder", ["sleeping murder"]) == 100
        assert score_title("Sleeping Murder: A Miss Marple Mystery", ["Sleeping Murder"]) == 50
        assert score_title("Murder", ["Sleeping Murder"]) == 50
        assert score_title("Children of the Peak", ["The Children of Red Peak"]) == 20
        assert score_title("Red Sky", ["Red Peak"]) == 0

    def test_title_sums_over_candidates(self):
        assert score_title("Sleeping Murder", ["Sleeping Murder", "SLEEPING MURDER"]) == 200

    def test_author_tiers(self):
        assert score_author("Agatha Christie", ["AGATHA CHRISTIE"]) == 80
        assert score_author("Agatha Christie, Mary Westmacott", ["Agatha Christie"]) == 40
        assert score_author("C. DiLouie", ["Craig DiLouie"]) == 15
        assert score_author("Stephen King and Owen King", ["Owen Stephen"]) == 30

    def test_empty_record_fields_never_score(self):
        assert score_title("", ["Sleeping Murder"]) == 0
        assert score_author("", ["Agatha Christie"]) == 0


class TestCandidateRanker:
    """Tests for CandidateRanker ordering."""

    @pytest.fixture
    def ranker(self):
        return CandidateRanker()

    def test_best_match_first(self, ranker, candidates):
        records = [
            book("Gone Girl", "Gillian Flynn"),
            book("The Body in the Library", "Agatha Christie"),
            book("Sleeping Murder", "Agatha Christie"),
        ]

        ranked = ranker.rank(records, candidates)

        assert [r.title for r in ranked] == [
            "Sleeping Murder",
            "The Body in the Library",
            "Gone Girl",
        ]

    def test_ties_keep_arrival_order(self, ranker, candidates):
        records = [book("Gone Girl", "Gillian Flynn"), book("Dune", "Frank Herbert")]

        assert ranker.rank(records, candidates) == records

    def test_records_are_not_mutated(self, ranker, candidates):
        record = book("Sleeping Murder", "Agatha Christie")

        ranked = ranker.rank([record], candidates)

        assert ranked[0] is record
        assert "score" not in record.to_dict()

    def test_score_wraps_records(self, ranker, candidates):
        records = [book("Dune", "Frank Herbert"), book("Sleeping Murder", "Agatha Christie")]

        scored = ranker.score(records, candidates)

        assert all(isinstance(s, ScoredBookRecord) for s in scored)
        assert [s.arrival_index for s in scored] == [0, 1]
        assert scored[1].score == 180

    def test_rank_empty(self, ranker, candidates):
        assert ranker.rank([], candidates) == []
