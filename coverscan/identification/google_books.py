"""
Google Books API Client

Book search provider backed by the Google Books Volume API.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp
from loguru import logger

from coverscan.recognition.text_normalizer import is_valid_isbn, normalize_isbn


class BookSearchError(Exception):
    """A book search provider call failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class RateLimitedError(BookSearchError):
    """The provider rejected the call with HTTP 429."""


@dataclass(frozen=True)
class BookRecord:
    """Standardized book record returned by a search provider."""
    google_books_id: Optional[str]
    title: str
    author: str
    publish_year: Optional[int] = None
    publisher: str = ""
    page_count: Optional[int] = None
    cover_url: str = ""
    isbn: str = ""

    @property
    def dedup_key(self) -> str:
        return f"{self.title.lower()}|{self.author.lower()}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "googleBooksId": self.google_books_id,
            "title": self.title,
            "author": self.author,
            "publishYear": self.publish_year,
            "publisher": self.publisher,
            "pageCount": self.page_count,
            "coverUrl": self.cover_url,
            "isbn": self.isbn,
        }


class BookSearchProvider(ABC):
    """Abstract base class for book search backends."""

    @abstractmethod
    async def search(self, query: str, max_results: int = 5) -> list[BookRecord]:
        """Free-text search. Raises BookSearchError on failure."""
        pass

    async def lookup_isbn(self, isbn: str) -> Optional[BookRecord]:
        """
        Look up a book by ISBN.

        Args:
            isbn: ISBN-10 or ISBN-13, hyphens allowed

        Returns:
            First matching BookRecord, or None

        Raises:
            ValueError: The ISBN checksum is invalid
            BookSearchError: The API call failed
        """
        normalized = normalize_isbn(isbn)
        if not is_valid_isbn(normalized):
            raise ValueError(f"Invalid ISBN: {isbn!r}")

        results = await self.search(f"isbn:{normalized}", max_results=1)
        if not results:
            logger.info(f"No volume found for ISBN {normalized}")
            return None
        return results[0]


class GoogleBooksClient(BookSearchProvider):
    """Client for Google Books API."""

    BASE_URL = "https://www.googleapis.com/books/v1/volumes"
    MAX_RESULTS_LIMIT = 40

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 10.0,
    ):
        """
        Initialize client.

        Args:
            api_key: Optional API key. If not provided, tries GOOGLE_BOOKS_API_KEY env var.
            base_url: Override for the volumes endpoint
            timeout_seconds: Total timeout for one HTTP request
        """
        self.api_key = api_key or os.getenv("GOOGLE_BOOKS_API_KEY")
        self.base_url = base_url or self.BASE_URL
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        if not self.api_key:
            logger.warning("No Google Books API key provided. Rate limits will be lower.")

    async def search(self, query: str, max_results: int = 5) -> list[BookRecord]:
        """
        Search for books.

        Args:
            query: Search query string
            max_results: Maximum number of results to return

        Returns:
            List of BookRecord objects

        Raises:
            BookSearchError: The API call failed or returned a non-200 status
        """
        if not query or not query.strip():
            return []

        params = {
            "q": query,
            "maxResults": max(1, min(max_results, self.MAX_RESULTS_LIMIT)),
            "printType": "books",
        }

        if self.api_key:
            params["key"] = self.api_key

        data = await self._get(params)

        results = []
        for item in data.get("items") or []:
            record = self._parse_volume(item)
            if record:
                results.append(record)

        return results

    async def _get(self, params: dict[str, Any]) -> dict[str, Any]:
        """Issue the volumes request and decode the JSON body."""
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(self.base_url, params=params) as resp:
                    if resp.status == 429:
                        logger.warning("Google Books API rate limit exceeded")
                        raise RateLimitedError("Rate limit exceeded", status=429)

                    if resp.status != 200:
                        error_text = await resp.text()
                        logger.error(f"Google Books API error {resp.status}: {error_text}")
                        raise BookSearchError(
                            f"Google Books API error: {resp.status}", status=resp.status
                        )

                    return await resp.json()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to search Google Books: {e}")
            raise BookSearchError(f"Google Books request failed: {e}") from e

    def _parse_volume(self, item: dict[str, Any]) -> Optional[BookRecord]:
        """Parse raw API response into BookRecord."""
        try:
            volume_info = item.get("volumeInfo") or {}

            # Prefer ISBN_13 over ISBN_10
            identifiers = {
                identifier.get("type"): identifier.get("identifier", "")
                for identifier in volume_info.get("industryIdentifiers") or []
            }
            isbn = identifiers.get("ISBN_13") or identifiers.get("ISBN_10") or ""

            image_links = volume_info.get("imageLinks") or {}
            thumbnail = image_links.get("thumbnail") or ""
            if thumbnail:
                thumbnail = thumbnail.replace("http:", "https:", 1)

            published = volume_info.get("publishedDate") or ""
            publish_year = int(published[:4]) if published[:4].isdigit() else None

            return BookRecord(
                google_books_id=item.get("id"),
                title=volume_info.get("title") or "",
                author=", ".join(volume_info.get("authors") or []),
                publish_year=publish_year,
                publisher=volume_info.get("publisher") or "",
                page_count=volume_info.get("pageCount") or None,
                cover_url=thumbnail,
                isbn=isbn,
            )

        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Error parsing volume data: {e}")
            return None
