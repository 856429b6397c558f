"""
Text Normalizer for CoverScan

Small, pure helpers shared by the recognition and identification stages:
- Candidate cleaning (whitespace collapse, noise stripping)
- Case/whitespace-insensitive comparison keys
- Order-preserving case-insensitive deduplication
- ISBN normalization and checksum validation
"""

import re
from typing import Iterable, Optional


# Anything outside word characters, whitespace, apostrophes, dots and hyphens
_NOISE_PATTERN = re.compile(r"[^\w\s'.-]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def clean_candidate(text: str) -> str:
    """
    Clean a raw OCR line for use as a title/author candidate.

    Args:
        text: Raw line text

    Returns:
        Cleaned text, possibly empty
    """
    if not text:
        return ""
    text = _WHITESPACE_PATTERN.sub(" ", text)
    text = _NOISE_PATTERN.sub("", text)
    return text.strip()


def comparison_key(text: str) -> str:
    """Lowercase text with runs of whitespace collapsed to one space."""
    return " ".join(text.lower().split())


def dedupe_casefold(values: Iterable[str], limit: Optional[int] = None) -> list[str]:
    """
    Remove case-insensitive duplicates, keeping the first occurrence.

    Empty strings are dropped.
    """
    seen = set()
    result = []
    for value in values:
        if not value:
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
        if limit is not None and len(result) >= limit:
            break
    return result


# =============================================================================
# ISBN
# =============================================================================

def normalize_isbn(isbn: str) -> str:
    """Strip spaces and hyphens and upper-case a trailing X."""
    return re.sub(r"[\s-]", "", isbn or "").upper()


def is_valid_isbn(isbn: str) -> bool:
    """Validate an ISBN-10 or ISBN-13 (normalized or not)."""
    isbn = normalize_isbn(isbn)
    if len(isbn) == 10:
        return _validate_isbn10(isbn)
    if len(isbn) == 13:
        return _validate_isbn13(isbn)
    return False


def _validate_isbn10(isbn: str) -> bool:
    """Validate ISBN-10 checksum."""
    if not re.fullmatch(r"[0-9]{9}[0-9X]", isbn):
        return False

    total = sum(
        (10 if c == "X" else int(c)) * (10 - i)
        for i, c in enumerate(isbn)
    )
    return total % 11 == 0


def _validate_isbn13(isbn: str) -> bool:
    """Validate ISBN-13 checksum."""
    if not re.fullmatch(r"[0-9]{13}", isbn):
        return False

    total = sum(
        int(c) * (1 if i % 2 == 0 else 3)
        for i, c in enumerate(isbn)
    )
    return total % 10 == 0
