"""
Pytest configuration and shared fixtures.
"""

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from bookshelf.models import BookPayload
from bookshelf.store import BookStore


@pytest.fixture
def id_provider():
    """Deterministic ids: book-1, book-2, ..."""
    counter = itertools.count(1)
    return lambda: f"book-{next(counter)}"


@pytest.fixture
def clock():
    """Clock that advances one second per call."""
    start = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def store(id_provider, clock):
    """Fresh, empty store for each test."""
    return BookStore(id_provider=id_provider, clock=clock)


@pytest.fixture
def client(store):
    """Test client bound to an app serving the test store."""
    return TestClient(create_app(store))


@pytest.fixture
def sample_payload():
    """Valid payload for a book that is being read."""
    return BookPayload(
        name="Dune",
        year=1965,
        author="Frank Herbert",
        summary="A desert planet and its spice.",
        publisher="Chilton Books",
        page_count=412,
        read_page=120,
        reading=True
    )


@pytest.fixture
def sample_book_json():
    """Request body for a valid book, with wire field names."""
    return {
        "name": "Dune",
        "year": 1965,
        "author": "Frank Herbert",
        "summary": "A desert planet and its spice.",
        "publisher": "Chilton Books",
        "pageCount": 412,
        "readPage": 120,
        "reading": True
    }
