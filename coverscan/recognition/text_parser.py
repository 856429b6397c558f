"""
Cover Text Parser

Turns raw OCR text from a book cover into ranked title and author
candidates.

Pipeline:
1. Split into trimmed lines, dropping one-character noise
2. Re-join titles that OCR wrapped one word per line
3. Classify each line with an ordered list of rules
   (boilerplate -> "by" context -> inline "by" -> name/title)
4. Recombine scattered ALL-CAPS words into a top-priority title
5. Clean, deduplicate and cross-filter the candidate lists

Design Decisions:
1. Conservative authors: a name needs a dictionary hit or a structural
   signal (initial, particle), so title noise rarely becomes an author
2. Rules are pure functions of (line, previous line); the candidate lists
   are threaded through an immutable state value
3. All word lists live in CoverLexicon so they can be tuned without code
   changes
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Callable, Optional

from loguru import logger

from coverscan.recognition.first_names import NameDictionary
from coverscan.recognition.lexicon import CoverLexicon
from coverscan.recognition.text_normalizer import clean_candidate, dedupe_casefold


MAX_TITLE_CANDIDATES = 5
MAX_AUTHOR_CANDIDATES = 3

_BY_PREFIX = re.compile(r"^by\s+(.+)$", re.IGNORECASE)
_ALL_CAPS_FRAGMENT = re.compile(r"^[A-Z]{3,}$")
_UPPERCASE_WORD = re.compile(r"^[A-Z]+$")
_BARE_INITIAL = re.compile(r"^[A-Z]\.$")
_NUMERIC_OR_PUNCT = re.compile(r"^[\d\s\-.,]+$")
_LETTER_RUN = re.compile(r"[^\W\d_]{2,}")


@dataclass(frozen=True)
class CandidateSet:
    """Title and author candidates, most likely first."""

    title_candidates: tuple[str, ...] = ()
    author_candidates: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.title_candidates and not self.author_candidates

    def to_dict(self) -> dict:
        return {
            "titleCandidates": list(self.title_candidates),
            "authorCandidates": list(self.author_candidates),
        }


class LineTag(str, Enum):
    """How a working line was classified."""
    BOILERPLATE = "boilerplate"
    AUTHOR_AFTER_BY = "author_after_by"
    AUTHOR_INLINE_BY = "author_inline_by"
    NAME = "name"
    TITLE = "title"
    NOISE = "noise"


@dataclass(frozen=True)
class LineClassification:
    """Result of classifying one working line."""

    tag: LineTag
    author: Optional[str] = None
    is_title: bool = False


@dataclass(frozen=True)
class ExtractionState:
    """Accumulator threaded through line classification."""

    title_candidates: tuple[str, ...] = ()
    author_candidates: tuple[str, ...] = ()
    previous_line: str = ""

    def advance(
        self,
        line: str,
        classification: LineClassification,
        max_titles: int = MAX_TITLE_CANDIDATES,
    ) -> "ExtractionState":
        """Return the state after consuming ``line``."""
        titles = self.title_candidates
        authors = self.author_candidates

        if classification.author:
            author = clean_candidate(classification.author)
            if author:
                authors = authors + (author,)

        if classification.is_title and len(titles) < max_titles:
            title = clean_candidate(line)
            if title:
                titles = titles + (title,)

        return ExtractionState(
            title_candidates=titles,
            author_candidates=authors,
            previous_line=line.lower(),
        )


Rule = Callable[[str, str], Optional[LineClassification]]


class CandidateExtractor:
    """
    Heuristic title/author extractor for cover OCR text.

    Usage:
        extractor = CandidateExtractor()
        candidates = extractor.extract("SLEEPING\\nMURDER\\nAgatha Christie")
        candidates.title_candidates   # ("SLEEPING MURDER",)
        candidates.author_candidates  # ("Agatha Christie",)
    """

    def __init__(
        self,
        names: Optional[NameDictionary] = None,
        lexicon: Optional[CoverLexicon] = None,
        max_titles: int = MAX_TITLE_CANDIDATES,
        max_authors: int = MAX_AUTHOR_CANDIDATES,
    ):
        """
        Initialize extractor.

        Args:
            names: First-name dictionary used by the name heuristic
            lexicon: Heuristic lookup tables
            max_titles: Cap on title candidates
            max_authors: Cap on author candidates
        """
        self.lexicon = lexicon or CoverLexicon()
        self.names = names or NameDictionary(self.lexicon.extra_first_names)
        self.max_titles = max_titles
        self.max_authors = max_authors

        # Evaluated in order; first match wins
        self._rules: list[Rule] = [
            self._boilerplate_rule,
            self._author_after_by_rule,
            self._author_inline_by_rule,
            self._name_or_title_rule,
        ]

    def extract(self, raw_text: str) -> CandidateSet:
        """
        Extract title and author candidates from raw OCR text.

        Args:
            raw_text: Multi-line text recognised on the cover

        Returns:
            CandidateSet (empty for blank input)
        """
        if not raw_text or not raw_text.strip():
            return CandidateSet()

        lines = self.split_lines(raw_text)
        working_lines = self.join_wrapped_titles(lines)

        state = ExtractionState()
        for line in working_lines:
            state = state.advance(line, self.classify(line, state.previous_line), self.max_titles)

        titles = list(state.title_candidates)
        combined = self.recombine_caps_fragments(lines)
        if combined and combined.lower() not in {t.lower() for t in titles}:
            titles.insert(0, combined)

        authors = dedupe_casefold(state.author_candidates, limit=self.max_authors)
        author_keys = {a.lower() for a in authors}
        titles = dedupe_casefold(
            (t for t in titles if t.lower() not in author_keys),
            limit=self.max_titles,
        )

        logger.debug(
            f"Extracted {len(titles)} title / {len(authors)} author candidates "
            f"from {len(lines)} lines"
        )
        return CandidateSet(title_candidates=tuple(titles), author_candidates=tuple(authors))

    # =========================================================================
    # Line preparation
    # =========================================================================

    @staticmethod
    def split_lines(raw_text: str) -> list[str]:
        """Split on newlines, trim, and drop lines of one character or less."""
        stripped = (line.strip() for line in raw_text.split("\n"))
        return [line for line in stripped if len(line) > 1]

    def join_wrapped_titles(self, lines: list[str]) -> list[str]:
        """
        Join runs of single upper-case words into one line.

        "THE\\nCHILDREN\\nOF\\nRED\\nPEAK" becomes "THE CHILDREN OF RED PEAK".
        Runs of one pass through unchanged.
        """
        result: list[str] = []
        run: list[str] = []

        for line in lines:
            if self._is_title_fragment(line):
                run.append(line)
                continue
            if run:
                result.append(" ".join(run))
                run = []
            result.append(line)

        if run:
            result.append(" ".join(run))

        return result

    def _is_title_fragment(self, line: str) -> bool:
        if not _UPPERCASE_WORD.match(line):
            return False
        return len(line) >= 3 or line in self.lexicon.join_stop_words

    def recombine_caps_fragments(self, lines: list[str]) -> Optional[str]:
        """Join 2-4 standalone ALL-CAPS lines into a single title guess."""
        fragments = [
            line for line in lines
            if _ALL_CAPS_FRAGMENT.match(line) and not self.lexicon.is_boilerplate(line)
        ]
        if 2 <= len(fragments) <= 4:
            return clean_candidate(" ".join(fragments)) or None
        return None

    # =========================================================================
    # Classification
    # =========================================================================

    def classify(self, line: str, previous_line: str = "") -> LineClassification:
        """Run the ordered rules over a working line."""
        for rule in self._rules:
            result = rule(line, previous_line)
            if result is not None:
                return result
        return LineClassification(LineTag.NOISE)

    def _boilerplate_rule(self, line: str, previous_line: str) -> Optional[LineClassification]:
        if self.lexicon.is_boilerplate(line):
            return LineClassification(LineTag.BOILERPLATE)
        return None

    def _author_after_by_rule(self, line: str, previous_line: str) -> Optional[LineClassification]:
        if "by" in previous_line and self.looks_like_author(line):
            return LineClassification(LineTag.AUTHOR_AFTER_BY, author=line)
        return None

    def _author_inline_by_rule(self, line: str, previous_line: str) -> Optional[LineClassification]:
        match = _BY_PREFIX.match(line)
        if match:
            remainder = match.group(1).strip()
            if self.looks_like_author(remainder):
                return LineClassification(LineTag.AUTHOR_INLINE_BY, author=remainder)
        return None

    def _name_or_title_rule(self, line: str, previous_line: str) -> Optional[LineClassification]:
        is_author = self.looks_like_author(line)
        is_title = self.looks_like_title(line)
        if is_author:
            return LineClassification(LineTag.NAME, author=line, is_title=is_title)
        if is_title:
            return LineClassification(LineTag.TITLE, is_title=True)
        return None

    # =========================================================================
    # Predicates
    # =========================================================================

    def looks_like_author(self, text: str) -> bool:
        """Name-like text that does not read as a title phrase."""
        return (
            self.looks_like_name(text)
            and not self.looks_like_title_phrase(text)
            and not self.has_title_keyword(text)
        )

    def looks_like_name(self, text: str) -> bool:
        """
        Check whether text is shaped like a person's name.

        Either a single ALL-CAPS word (a surname), or 2-4 capitalised
        tokens with at least one supporting signal: a known first name,
        a bare initial ("K."), or a name particle ("von").
        """
        words = text.split()

        if len(words) == 1:
            word = words[0]
            return len(word) >= 3 and word.isalpha() and word.isupper()

        if not 2 <= len(words) <= 4:
            return False

        particles = self.lexicon.name_particles
        for word in words:
            cleaned = re.sub(r"[.,]", "", word)
            if not cleaned:
                return False
            if not cleaned[0].isupper() and cleaned.lower() not in particles:
                return False

        if self.names.is_first_name(words[0]):
            return True
        if any(_BARE_INITIAL.match(word.rstrip(",")) for word in words):
            return True
        return any(word.lower() in particles for word in words)

    def looks_like_title_phrase(self, text: str) -> bool:
        """Two or more articles/prepositions mark a title, not a name."""
        function_words = self.lexicon.title_phrase_words
        return sum(1 for word in text.lower().split() if word in function_words) >= 2

    def has_title_keyword(self, text: str) -> bool:
        keywords = self.lexicon.title_keywords
        return any(word.strip(".,'") in keywords for word in text.lower().split())

    @staticmethod
    def looks_like_title(text: str) -> bool:
        """Reasonable length, not just numbers/punctuation, has some letters."""
        if len(text) < 3 or len(text) > 100:
            return False
        if _NUMERIC_OR_PUNCT.match(text):
            return False
        return bool(_LETTER_RUN.search(text))


def parse_ocr_text(raw_text: str) -> CandidateSet:
    """Extract candidates with the default dictionary and lexicon."""
    return _default_extractor().extract(raw_text)


@lru_cache()
def _default_extractor() -> CandidateExtractor:
    return CandidateExtractor()
