"""
API Schemas for CoverScan

Pydantic models for request validation and response serialization.
Response fields use the camelCase names existing clients expect.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


MAX_TEXT_LENGTH = 20_000
MAX_RESULTS_LIMIT = 40


# =============================================================================
# Recognition Schemas
# =============================================================================

class RecognizeRequest(BaseModel):
    """Cover text recognition request."""

    text: str = Field(..., max_length=MAX_TEXT_LENGTH, description="OCR text from the cover")
    max_results: Optional[int] = Field(
        None, ge=1, le=MAX_RESULTS_LIMIT, description="Cap on returned books (server default if omitted)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "SLEEPING\nMURDER\nAgatha Christie",
                "max_results": 8,
            }
        }
    )


class BookRecordSchema(BaseModel):
    """Book returned by the search provider."""

    model_config = ConfigDict(populate_by_name=True)

    google_books_id: Optional[str] = Field(None, alias="googleBooksId")
    title: str
    author: str
    publish_year: Optional[int] = Field(None, alias="publishYear")
    publisher: str = ""
    page_count: Optional[int] = Field(None, alias="pageCount")
    cover_url: str = Field("", alias="coverUrl")
    isbn: str = ""


class CandidateSetSchema(BaseModel):
    """Extracted title/author candidates."""

    model_config = ConfigDict(populate_by_name=True)

    title_candidates: list[str] = Field(default_factory=list, alias="titleCandidates")
    author_candidates: list[str] = Field(default_factory=list, alias="authorCandidates")


class RecognizeResponse(BaseModel):
    """Cover recognition result."""

    model_config = ConfigDict(populate_by_name=True)

    raw_text: str = Field(..., alias="rawText")
    candidates: CandidateSetSchema
    search_queries: list[str] = Field(default_factory=list, alias="searchQueries")
    books: list[BookRecordSchema] = Field(default_factory=list)


# =============================================================================
# System Schemas
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    components: dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str
    code: str
    detail: Optional[str] = None
    timestamp: datetime
