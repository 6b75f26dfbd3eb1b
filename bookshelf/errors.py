"""
Error kinds and typed results returned by the book store.
"""

from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class StoreError(str, Enum):
    """Reasons a store operation can fail."""
    MISSING_NAME = "missing_name"
    INVALID_PAGE_RANGE = "invalid_page_range"
    NOT_FOUND = "not_found"
    INTERNAL_ERROR = "internal_error"


class StoreResult(BaseModel, Generic[T]):
    """Outcome of a store operation: either a value or an error kind."""
    value: Optional[T] = Field(None, description="Operation result on success")
    error: Optional[StoreError] = Field(None, description="Failure reason")

    @classmethod
    def success(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StoreError) -> "StoreResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
