"""
Cover Text Recognition Module

Turns raw cover OCR text into search material:
- First-name dictionary and heuristic lexicon
- Title/author candidate extraction
- Search query planning
"""

from coverscan.recognition.first_names import NameDictionary, COMMON_FIRST_NAMES
from coverscan.recognition.lexicon import CoverLexicon, load_lexicon
from coverscan.recognition.text_parser import (
    CandidateExtractor,
    CandidateSet,
    LineTag,
    parse_ocr_text,
)
from coverscan.recognition.query_planner import QueryPlanner, generate_search_queries

__all__ = [
    # Dictionaries
    "NameDictionary",
    "COMMON_FIRST_NAMES",
    "CoverLexicon",
    "load_lexicon",
    # Extraction
    "CandidateExtractor",
    "CandidateSet",
    "LineTag",
    "parse_ocr_text",
    # Queries
    "QueryPlanner",
    "generate_search_queries",
]
