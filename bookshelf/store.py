"""
In-memory book store.

Keeps book records in insertion order and implements the create, list,
fetch, update and delete operations used by the HTTP layer. Failures are
returned as ``StoreResult`` errors rather than raised.
"""

from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import Callable, List, Optional

import structlog

from bookshelf.errors import StoreError, StoreResult
from bookshelf.ids import IdProvider, generate_book_id
from bookshelf.models import Book, BookFilter, BookPayload, BookSummary

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]

_MIN_TICK = timedelta(microseconds=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _validate(payload: BookPayload) -> Optional[StoreError]:
    """Return the first validation failure for a payload, if any."""
    if not payload.has_name:
        return StoreError.MISSING_NAME
    if not payload.page_range_valid:
        return StoreError.INVALID_PAGE_RANGE
    return None


class BookStore:
    """Ordered, process-local collection of book records."""

    def __init__(
        self,
        id_provider: IdProvider = generate_book_id,
        clock: Clock = utc_now
    ):
        self._books: List[Book] = []
        self._id_provider = id_provider
        self._clock = clock
        self._lock = RLock()

    def __len__(self) -> int:
        return len(self._books)

    def _index_of(self, book_id: str) -> int:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return -1

    def insert(self, payload: BookPayload) -> StoreResult[str]:
        """
        Add a new book.

        Args:
            payload: Fields for the new book

        Returns:
            StoreResult holding the new book id
        """
        error = _validate(payload)
        if error:
            logger.warning("Book insert rejected", error=error.value)
            return StoreResult[str].failure(error)

        with self._lock:
            book_id = self._id_provider()
            if self._index_of(book_id) != -1:
                logger.error("Generated book id collides with existing record", book_id=book_id)
                return StoreResult[str].failure(StoreError.INTERNAL_ERROR)

            now = self._clock()
            book = Book.from_payload(book_id, payload, inserted_at=now, updated_at=now)
            self._books.append(book)

        logger.info("Book inserted", book_id=book_id, name=book.name)
        return StoreResult[str].success(book_id)

    def list_books(self, book_filter: Optional[BookFilter] = None) -> List[BookSummary]:
        """
        List books matching a filter, in insertion order.

        Args:
            book_filter: Optional filter; None returns every book

        Returns:
            Summaries of the matching books
        """
        book_filter = book_filter or BookFilter()
        with self._lock:
            return [book.to_summary() for book in self._books if book_filter.matches(book)]

    def get_by_id(self, book_id: str) -> StoreResult[Book]:
        """Fetch the full record for ``book_id``."""
        with self._lock:
            index = self._index_of(book_id)
            if index == -1:
                return StoreResult[Book].failure(StoreError.NOT_FOUND)
            return StoreResult[Book].success(self._books[index])

    def update_by_id(self, book_id: str, payload: BookPayload) -> StoreResult[None]:
        """
        Replace every caller-settable field of a book.

        The id and insertion time are kept, ``finished`` is recomputed and
        ``updatedAt`` refreshed to a time later than the previous one. The
        record keeps its position.

        Args:
            book_id: Id of the book to update
            payload: New field values

        Returns:
            Empty StoreResult on success
        """
        error = _validate(payload)
        if error:
            logger.warning("Book update rejected", book_id=book_id, error=error.value)
            return StoreResult[None].failure(error)

        with self._lock:
            index = self._index_of(book_id)
            if index == -1:
                logger.warning("Book update rejected", book_id=book_id, error=StoreError.NOT_FOUND.value)
                return StoreResult[None].failure(StoreError.NOT_FOUND)

            current = self._books[index]
            updated_at = max(self._clock(), current.updated_at + _MIN_TICK)
            self._books[index] = Book.from_payload(
                book_id,
                payload,
                inserted_at=current.inserted_at,
                updated_at=updated_at
            )

        logger.info("Book updated", book_id=book_id)
        return StoreResult[None].success()

    def delete_by_id(self, book_id: str) -> StoreResult[None]:
        """Remove a book, keeping the order of the remaining ones."""
        with self._lock:
            index = self._index_of(book_id)
            if index == -1:
                logger.warning("Book delete rejected", book_id=book_id, error=StoreError.NOT_FOUND.value)
                return StoreResult[None].failure(StoreError.NOT_FOUND)
            del self._books[index]

        logger.info("Book deleted", book_id=book_id)
        return StoreResult[None].success()

    def clear(self) -> None:
        with self._lock:
            self._books.clear()
