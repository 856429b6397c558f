"""
Unit tests for text normalization helpers.
"""

import pytest

from coverscan.recognition.text_normalizer import (
    clean_candidate,
    comparison_key,
    dedupe_casefold,
    is_valid_isbn,
    normalize_isbn,
)


class TestCandidateCleaning:

    def test_collapses_whitespace_and_strips_noise(self):
        assert clean_candidate("  Sleeping\t  Murder!! ") == "Sleeping Murder"

    def test_keeps_apostrophes_dots_and_hyphens(self):
        assert clean_candidate("Flannery O'Connor-Smith Jr.") == "Flannery O'Connor-Smith Jr."

    def test_can_empty_a_candidate(self):
        assert clean_candidate("*** !!!") == ""
        assert clean_candidate("") == ""

    def test_keeps_accented_letters(self):
        assert clean_candidate("Günter Grass") == "Günter Grass"


class TestComparison:

    def test_comparison_key(self):
        assert comparison_key("  Sleeping   MURDER ") == "sleeping murder"

    def test_dedupe_casefold_keeps_first(self):
        values = ["Dune", "", "DUNE", "Emma", "dune", "Ulysses"]

        assert dedupe_casefold(values) == ["Dune", "Emma", "Ulysses"]
        assert dedupe_casefold(values, limit=2) == ["Dune", "Emma"]


class TestIsbn:

    def test_normalize(self):
        assert normalize_isbn(" 0-8044-2957-x ") == "080442957X"
        assert normalize_isbn(None) == ""

    @pytest.mark.parametrize("isbn", [
        "9780743273565",
        "978-0-7432-7356-5",
        "0743273567",
        "080442957X",
        "0-8044-2957-x",
    ])
    def test_valid(self, isbn):
        assert is_valid_isbn(isbn)

    @pytest.mark.parametrize("isbn", [
        "9780743273566",   # bad check digit
        "0743273568",
        "97807432735",     # wrong length
        "X804429570",      # X only allowed last
        "978074327356X",
        "",
    ])
    def test_invalid(self, isbn):
        assert not is_valid_isbn(isbn)
