"""
In-memory bookshelf record store.

This package provides:
- Book, payload, filter and summary models
- Typed store results and error kinds
- The BookStore with insert, list, get, update and delete operations
"""

from bookshelf.errors import StoreError, StoreResult
from bookshelf.ids import generate_book_id, make_id_provider
from bookshelf.models import Book, BookFilter, BookPayload, BookSummary, parse_flag
from bookshelf.store import BookStore

__all__ = [
    "Book",
    "BookFilter",
    "BookPayload",
    "BookStore",
    "BookSummary",
    "StoreError",
    "StoreResult",
    "generate_book_id",
    "make_id_provider",
    "parse_flag",
]
