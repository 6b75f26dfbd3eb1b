"""
Opaque identifier generation for book records.
"""

import secrets
from typing import Callable

IdProvider = Callable[[], str]

DEFAULT_ID_LENGTH = 16


def generate_book_id(length: int = DEFAULT_ID_LENGTH) -> str:
    """Generate a random URL-safe id of ``length`` characters."""
    # token_urlsafe(n) yields at least n characters
    return secrets.token_urlsafe(length)[:length]


def make_id_provider(length: int = DEFAULT_ID_LENGTH) -> IdProvider:
    """Return a provider producing ids of a fixed length."""
    def provider() -> str:
        return generate_book_id(length)
    return provider
