"""
API Routes for CoverScan

Route modules:
- recognition: Identify a book from cover OCR text
- books: Direct ISBN lookup
"""

from coverscan.api.routes.recognition import router as recognition_router
from coverscan.api.routes.books import router as books_router

__all__ = [
    "recognition_router",
    "books_router",
]
