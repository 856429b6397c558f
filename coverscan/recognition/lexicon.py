"""
Cover Lexicon

Lookup tables driving the cover-text heuristics:
- Boilerplate phrases (marketing, legal and retail text)
- Title keywords that veto an author classification
- Function words used to spot title phrases and wrapped titles
- Name particles ("von", "de", ...)

The defaults are tuned on English-language genre covers. They can be
replaced or extended from a YAML file without touching code.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from loguru import logger


DEFAULT_BOILERPLATE = (
    "new york times bestseller",
    "bestseller",
    "a novel",
    "a memoir",
    "now a major motion picture",
    "introduction by",
    "foreword by",
    "translated by",
    "isbn",
    "barcode",
    "copyright",
    "penguin",
    "classics",
    "www.",
    ".com",
    "http",
    "$",
    "£",
    "€",
)

DEFAULT_TITLE_KEYWORDS = (
    "murder", "death", "escape", "sleeping", "night",
    "red", "peak", "children", "survive",
)

DEFAULT_TITLE_PHRASE_WORDS = (
    "the", "of", "and", "or", "in", "on", "at", "for", "with", "a", "an",
)

DEFAULT_JOIN_STOP_WORDS = (
    "OF", "THE", "AND", "A", "AN", "IN", "ON", "AT", "TO", "FOR", "BY",
)

DEFAULT_NAME_PARTICLES = ("von", "van", "de", "la", "du")

_TABLES = frozenset({
    "boilerplate", "title_keywords", "title_phrase_words",
    "join_stop_words", "name_particles", "extra_first_names",
})


def _lower_set(values) -> frozenset:
    return frozenset(str(v).strip().lower() for v in values if str(v).strip())


@dataclass(frozen=True)
class CoverLexicon:
    """Immutable set of heuristic lookup tables."""

    boilerplate: frozenset = field(default_factory=lambda: _lower_set(DEFAULT_BOILERPLATE))
    title_keywords: frozenset = field(default_factory=lambda: _lower_set(DEFAULT_TITLE_KEYWORDS))
    title_phrase_words: frozenset = field(default_factory=lambda: _lower_set(DEFAULT_TITLE_PHRASE_WORDS))
    join_stop_words: frozenset = field(
        default_factory=lambda: frozenset(w.upper() for w in DEFAULT_JOIN_STOP_WORDS)
    )
    name_particles: frozenset = field(default_factory=lambda: _lower_set(DEFAULT_NAME_PARTICLES))
    extra_first_names: frozenset = field(default_factory=frozenset)

    def is_boilerplate(self, text: str) -> bool:
        """Case-insensitive substring match against the boilerplate phrases."""
        lower = text.lower()
        return any(phrase in lower for phrase in self.boilerplate)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CoverLexicon":
        """
        Build a lexicon from a mapping.

        Args:
            data: Table name -> list of entries. With ``extend: true`` the
                entries are added to the defaults instead of replacing them.

        Returns:
            CoverLexicon
        """
        base = cls()
        extend = bool(data.get("extend", False))
        overrides = {}

        for name in _TABLES - {"join_stop_words"}:
            if data.get(name) is None:
                continue
            values = _lower_set(data[name])
            overrides[name] = (getattr(base, name) | values) if extend else values

        if data.get("join_stop_words") is not None:
            values = frozenset(str(w).strip().upper() for w in data["join_stop_words"] if str(w).strip())
            overrides["join_stop_words"] = (base.join_stop_words | values) if extend else values

        unknown = set(data) - _TABLES - {"extend"}
        if unknown:
            logger.warning(f"Ignoring unknown lexicon keys: {sorted(unknown)}")

        return replace(base, **overrides)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "CoverLexicon":
        """Load a lexicon from a YAML file."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Lexicon file {path} must contain a mapping")

        logger.info(f"Loaded cover lexicon from {path}")
        return cls.from_dict(data)


def load_lexicon(path: Optional[Union[str, Path]] = None) -> CoverLexicon:
    """Return the lexicon at ``path``, or the built-in defaults."""
    if path:
        return CoverLexicon.from_yaml(path)
    return CoverLexicon()
