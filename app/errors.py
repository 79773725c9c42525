# app/errors.py
"""
Errors raised by the book store and validator.

Each carries the HTTP status the API answers with; the mapping to a
response happens once, in ``app.main``.
"""

from typing import Any, Dict, List, Optional


class BookStoreError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FormatError(BookStoreError):
    """An id or isbn path segment has the wrong shape."""

    status_code = 400


class ValidationError(BookStoreError):
    """A payload failed the book schema."""

    status_code = 400

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(BookStoreError):
    status_code = 404


class DuplicateIsbnError(BookStoreError):
    status_code = 409
