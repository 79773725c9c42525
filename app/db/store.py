# app/db/store.py

import logging
import secrets
import time
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from app.db.schema import MUTABLE_COLUMNS, books, metadata
from app.errors import DuplicateIsbnError, FormatError, NotFoundError
from app.models.books import is_valid_book_id, is_valid_isbn, validate_book_payload

logger = logging.getLogger(__name__)


def new_book_id() -> str:
    """
    24 hex chars: 4-byte creation timestamp followed by 8 random bytes.
    """
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def _check_book_id(book_id: str) -> None:
    if not is_valid_book_id(book_id):
        raise FormatError(f"Invalid book id {book_id!r}")


def _check_isbn(isbn: str) -> None:
    if not is_valid_isbn(isbn):
        raise FormatError(f"Invalid isbn {isbn!r}")


class BookStore:
    """
    Persists book records in the `books` table.

    Every public method runs in its own transaction, so a failed call
    leaves the table as it was.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def create_schema(self) -> None:
        metadata.create_all(self.engine)

    def create(self, payload: Any) -> Dict[str, Any]:
        fields = validate_book_payload(payload)

        record = {"id": new_book_id()}
        record.update({col: fields.get(col) for col in MUTABLE_COLUMNS})

        try:
            with self.engine.begin() as conn:
                conn.execute(books.insert().values(**record))
        except IntegrityError as exc:
            raise DuplicateIsbnError(
                f"A book with isbn {record['isbn']!r} already exists"
            ) from exc

        logger.info("Created book %s (isbn %s)", record["id"], record["isbn"])
        return record

    def list_all(self) -> List[Dict[str, Any]]:
        with self.engine.connect() as conn:
            stmt = select(books).order_by(books.c.title, books.c.id)
            rows = conn.execute(stmt).mappings().all()

        return [dict(row) for row in rows]

    def find_by_id(self, book_id: str) -> Dict[str, Any]:
        _check_book_id(book_id)

        with self.engine.connect() as conn:
            row = conn.execute(
                select(books).where(books.c.id == book_id)
            ).mappings().first()

        if row is None:
            raise NotFoundError(f"Book {book_id} not found")
        return dict(row)

    def find_by_isbn(self, isbn: str) -> Dict[str, Any]:
        _check_isbn(isbn)

        with self.engine.connect() as conn:
            row = conn.execute(
                select(books).where(books.c.isbn == isbn)
            ).mappings().first()

        if row is None:
            raise NotFoundError(f"Book with isbn {isbn} not found")
        return dict(row)

    def update_by_isbn(self, isbn: str, payload: Any) -> Dict[str, Any]:
        """
        Replace the supplied fields of the book currently holding `isbn`.

        The path isbn is checked first, then the payload, then the lookup.
        """
        _check_isbn(isbn)
        changes = validate_book_payload(payload, partial=True)

        try:
            with self.engine.begin() as conn:
                row = conn.execute(
                    select(books).where(books.c.isbn == isbn)
                ).mappings().first()

                if row is None:
                    raise NotFoundError(f"Book with isbn {isbn} not found")

                if changes:
                    conn.execute(
                        books.update()
                        .where(books.c.id == row["id"])
                        .values(**changes)
                    )
        except IntegrityError as exc:
            raise DuplicateIsbnError(
                f"A book with isbn {changes.get('isbn')!r} already exists"
            ) from exc

        record = dict(row)
        record.update(changes)
        logger.info(
            "Updated book %s (isbn %s), fields: %s",
            record["id"],
            isbn,
            ", ".join(sorted(changes)) or "none",
        )
        return record

    def delete_by_id(self, book_id: str) -> Dict[str, Any]:
        _check_book_id(book_id)

        with self.engine.begin() as conn:
            row = conn.execute(
                select(books).where(books.c.id == book_id)
            ).mappings().first()

            if row is None:
                raise NotFoundError(f"Book {book_id} not found")

            conn.execute(books.delete().where(books.c.id == book_id))

        logger.info("Deleted book %s", book_id)
        return dict(row)

    def remove_all(self) -> int:
        with self.engine.begin() as conn:
            result = conn.execute(books.delete())

        logger.info("Removed %s book(s)", result.rowcount)
        return result.rowcount
