"""
Response envelopes and user-facing messages for the bookshelf API.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from bookshelf.errors import StoreError


class ResponseStatus(str, Enum):
    """Envelope status values."""
    SUCCESS = "success"
    FAIL = "fail"


class Operation(str, Enum):
    """Store operations exposed over HTTP."""
    INSERT = "insert"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"


SUCCESS_MESSAGES: Dict[Operation, str] = {
    Operation.INSERT: "Book added successfully",
    Operation.UPDATE: "Book updated successfully",
    Operation.DELETE: "Book deleted successfully",
}

ERROR_MESSAGES: Dict[Operation, Dict[StoreError, str]] = {
    Operation.INSERT: {
        StoreError.MISSING_NAME: "Failed to add book. Please provide the book name",
        StoreError.INVALID_PAGE_RANGE: "Failed to add book. readPage cannot be greater than pageCount",
        StoreError.INTERNAL_ERROR: "Failed to add book",
    },
    Operation.GET: {
        StoreError.NOT_FOUND: "Book not found",
    },
    Operation.UPDATE: {
        StoreError.MISSING_NAME: "Failed to update book. Please provide the book name",
        StoreError.INVALID_PAGE_RANGE: "Failed to update book. readPage cannot be greater than pageCount",
        StoreError.NOT_FOUND: "Failed to update book. Id not found",
    },
    Operation.DELETE: {
        StoreError.NOT_FOUND: "Failed to delete book. Id not found",
    },
}

ERROR_STATUS_CODES: Dict[StoreError, int] = {
    StoreError.MISSING_NAME: 400,
    StoreError.INVALID_PAGE_RANGE: 400,
    StoreError.NOT_FOUND: 404,
    StoreError.INTERNAL_ERROR: 500,
}


class SuccessResponse(BaseModel):
    """Envelope for successful responses."""
    status: ResponseStatus = Field(ResponseStatus.SUCCESS, description="Always 'success'")
    message: Optional[str] = Field(None, description="Human-readable outcome")
    data: Optional[Dict[str, Any]] = Field(None, description="Response payload")

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ErrorResponse(BaseModel):
    """Envelope for failed responses."""
    status: ResponseStatus = Field(ResponseStatus.FAIL, description="Always 'fail'")
    message: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books_count: int = Field(..., description="Number of books in the store")
