"""
FastAPI RESTful API for the bookshelf.

This module provides a REST API for:
- Adding, updating and removing books
- Listing books with name, reading and finished filters
- Fetching a single book by id
"""
