"""
FastAPI application for the Bookshelf API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import NoReturn, Optional

import structlog
from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import config as api_config
from api.models import (
    ERROR_MESSAGES, ERROR_STATUS_CODES, SUCCESS_MESSAGES,
    ErrorResponse, HealthResponse, Operation, SuccessResponse
)
from bookshelf.errors import StoreError
from bookshelf.ids import make_id_provider
from bookshelf.models import BookFilter, BookPayload
from bookshelf.store import BookStore
from utilities.config import config

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_store(request: Request) -> BookStore:
    """Store owned by the running application."""
    return request.app.state.store


def _raise_for(operation: Operation, error: StoreError) -> NoReturn:
    raise HTTPException(
        status_code=ERROR_STATUS_CODES[error],
        detail=ERROR_MESSAGES[operation][error]
    )


# Health check endpoint
@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(store: BookStore = Depends(get_store)):
    """Health check endpoint."""
    health = HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=api_config.api_version,
        books_count=len(store)
    )
    return JSONResponse(content=health.model_dump(mode="json"))


# Books endpoints
@router.post("/books", status_code=status.HTTP_201_CREATED, tags=["Books"])
async def add_book(
    payload: Optional[BookPayload] = Body(None),
    store: BookStore = Depends(get_store)
):
    """
    Add a book to the shelf.

    - **name**: Book name (required)
    - **pageCount** / **readPage**: readPage may not exceed pageCount
    """
    result = store.insert(payload or BookPayload())
    if not result.ok:
        _raise_for(Operation.INSERT, result.error)

    response = SuccessResponse(
        message=SUCCESS_MESSAGES[Operation.INSERT],
        data={"bookId": result.value}
    )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=response.to_content())


@router.get("/books", tags=["Books"])
async def get_books(
    name: Optional[str] = None,
    reading: Optional[str] = None,
    finished: Optional[str] = None,
    store: BookStore = Depends(get_store)
):
    """
    List books, optionally filtered.

    - **name**: Case-insensitive substring of the book name
    - **reading**: 1 for books being read, 0 for the rest
    - **finished**: 1 for finished books, 0 for the rest
    """
    book_filter = BookFilter.from_query(name=name, reading=reading, finished=finished)
    books = store.list_books(book_filter)

    response = SuccessResponse(data={"books": [book.model_dump() for book in books]})
    return JSONResponse(content=response.to_content())


@router.get("/books/{book_id}", tags=["Books"])
async def get_book(book_id: str, store: BookStore = Depends(get_store)):
    """Get a single book by ID."""
    result = store.get_by_id(book_id)
    if not result.ok:
        _raise_for(Operation.GET, result.error)

    response = SuccessResponse(data={"book": result.value.to_response()})
    return JSONResponse(content=response.to_content())


@router.put("/books/{book_id}", tags=["Books"])
async def update_book(
    book_id: str,
    payload: Optional[BookPayload] = Body(None),
    store: BookStore = Depends(get_store)
):
    """Replace the fields of an existing book."""
    result = store.update_by_id(book_id, payload or BookPayload())
    if not result.ok:
        _raise_for(Operation.UPDATE, result.error)

    response = SuccessResponse(message=SUCCESS_MESSAGES[Operation.UPDATE])
    return JSONResponse(content=response.to_content())


@router.delete("/books/{book_id}", tags=["Books"])
async def delete_book(book_id: str, store: BookStore = Depends(get_store)):
    """Remove a book from the shelf."""
    result = store.delete_by_id(book_id)
    if not result.ok:
        _raise_for(Operation.DELETE, result.error)

    response = SuccessResponse(message=SUCCESS_MESSAGES[Operation.DELETE])
    return JSONResponse(content=response.to_content())


# Exception handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors in the fail envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=str(exc.detail)).to_content(),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject malformed request data with 400."""
    logger.warning("Invalid request data", path=request.url.path, errors=str(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            message="Invalid request data",
            detail=str(exc.errors()) if api_config.debug else None
        ).to_content()
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            message="Internal server error",
            detail=str(exc) if api_config.debug else None
        ).to_content()
    )


def create_app(store: Optional[BookStore] = None) -> FastAPI:
    """
    Build the FastAPI application around a book store.

    Args:
        store: Store to serve; a new empty one is created when omitted

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Bookshelf API", books_count=len(app.state.store))
        yield
        logger.info("Shutting down Bookshelf API")

    app = FastAPI(
        title=api_config.api_title,
        description=api_config.api_description,
        version=api_config.api_version,
        lifespan=lifespan
    )
    if store is None:
        store = BookStore(id_provider=make_id_provider(config.book_id_length))
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=api_config.cors_allow_credentials,
        allow_methods=api_config.cors_allow_methods,
        allow_headers=api_config.cors_allow_headers,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(router)
    return app


# Process-wide application and its store
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=api_config.debug,
        log_level="info"
    )
