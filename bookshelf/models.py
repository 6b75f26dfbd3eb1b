"""
Pydantic models for bookshelf records.
Wire names are camelCase; Python attributes are snake_case.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """
    Interpret a query-string flag as a boolean.

    Args:
        value: Raw query value such as "1" or "0"

    Returns:
        None when the flag is absent or empty, otherwise whether the
        leading integer of the value is non-zero
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return False
    return int(match.group(1)) != 0


class BookPayload(BaseModel):
    """Caller-supplied fields for creating or replacing a book."""
    name: Optional[str] = Field(None, description="Name of the book")
    year: Optional[int] = Field(None, description="Publication year")
    author: Optional[str] = Field(None, description="Book author")
    summary: Optional[str] = Field(None, description="Short summary")
    publisher: Optional[str] = Field(None, description="Book publisher")
    page_count: Optional[int] = Field(None, alias="pageCount", description="Total number of pages")
    read_page: Optional[int] = Field(None, alias="readPage", description="Pages read so far")
    reading: Optional[bool] = Field(None, description="Whether the book is being read")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "name": "Dune",
                "year": 1965,
                "author": "Frank Herbert",
                "summary": "A desert planet and its spice.",
                "publisher": "Chilton Books",
                "pageCount": 412,
                "readPage": 120,
                "reading": True
            }
        }

    @property
    def has_name(self) -> bool:
        return bool(self.name)

    @property
    def page_range_valid(self) -> bool:
        """readPage must not exceed pageCount when both are given."""
        if self.page_count is None or self.read_page is None:
            return True
        return self.read_page <= self.page_count


class Book(BaseModel):
    """A stored bookshelf record."""
    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., description="Name of the book")
    year: Optional[int] = Field(None, description="Publication year")
    author: Optional[str] = Field(None, description="Book author")
    summary: Optional[str] = Field(None, description="Short summary")
    publisher: Optional[str] = Field(None, description="Book publisher")
    page_count: Optional[int] = Field(None, alias="pageCount", description="Total number of pages")
    read_page: Optional[int] = Field(None, alias="readPage", description="Pages read so far")
    finished: bool = Field(..., description="Whether every page has been read")
    reading: Optional[bool] = Field(None, description="Whether the book is being read")
    inserted_at: datetime = Field(..., alias="insertedAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        frozen = True

    @classmethod
    def from_payload(
        cls,
        book_id: str,
        payload: BookPayload,
        inserted_at: datetime,
        updated_at: datetime
    ) -> "Book":
        """Build a record from a payload, deriving ``finished``."""
        return cls(
            id=book_id,
            name=payload.name,
            year=payload.year,
            author=payload.author,
            summary=payload.summary,
            publisher=payload.publisher,
            page_count=payload.page_count,
            read_page=payload.read_page,
            finished=payload.page_count == payload.read_page,
            reading=payload.reading,
            inserted_at=inserted_at,
            updated_at=updated_at
        )

    def to_summary(self) -> "BookSummary":
        return BookSummary(id=self.id, name=self.name, publisher=self.publisher)

    def to_response(self) -> dict:
        """JSON-ready dict using wire field names."""
        return self.model_dump(by_alias=True, mode="json")


class BookSummary(BaseModel):
    """Projection of a book returned by list queries."""
    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., description="Name of the book")
    publisher: Optional[str] = Field(None, description="Book publisher")


class BookFilter(BaseModel):
    """Conjunctive filter for list queries. Unset options match everything."""
    name: Optional[str] = Field(None, description="Case-insensitive name substring")
    reading: Optional[bool] = Field(None, description="Required value of reading")
    finished: Optional[bool] = Field(None, description="Required value of finished")

    @classmethod
    def from_query(
        cls,
        name: Optional[str] = None,
        reading: Optional[str] = None,
        finished: Optional[str] = None
    ) -> "BookFilter":
        """Build a filter from raw query-string values."""
        return cls(
            name=name or None,
            reading=parse_flag(reading),
            finished=parse_flag(finished)
        )

    def matches(self, book: Book) -> bool:
        if self.name and self.name.lower() not in book.name.lower():
            return False
        if self.reading is not None and book.reading != self.reading:
            return False
        if self.finished is not None and book.finished != self.finished:
            return False
        return True
