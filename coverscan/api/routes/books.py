"""
Book Lookup API Routes

Direct lookups against the book search provider.
"""

from fastapi import APIRouter, Depends

from coverscan.api.dependencies import get_book_provider
from coverscan.api.middleware.error_handler import (
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from coverscan.api.schemas import BookRecordSchema, ErrorResponse
from coverscan.identification.google_books import BookSearchError, BookSearchProvider
from coverscan.recognition.text_normalizer import is_valid_isbn, normalize_isbn


router = APIRouter(prefix="/books", tags=["books"])


@router.get(
    "/isbn/{isbn}",
    response_model=BookRecordSchema,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid ISBN"},
        404: {"model": ErrorResponse, "description": "No book with this ISBN"},
        429: {"model": ErrorResponse, "description": "Provider rate limit"},
        503: {"model": ErrorResponse, "description": "Provider unavailable"},
    },
)
async def get_book_by_isbn(
    isbn: str,
    provider: BookSearchProvider = Depends(get_book_provider),
) -> BookRecordSchema:
    """Look up a single book by ISBN-10 or ISBN-13."""
    normalized = normalize_isbn(isbn)
    if not is_valid_isbn(normalized):
        raise ValidationError("Invalid ISBN", detail=f"'{isbn}' is not a valid ISBN-10 or ISBN-13")

    try:
        record = await provider.lookup_isbn(normalized)
    except BookSearchError as e:
        raise ExternalServiceError.from_search_error(e) from e

    if record is None:
        raise NotFoundError("Book", normalized)

    return BookRecordSchema.model_validate(record.to_dict())
