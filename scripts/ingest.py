# scripts/ingest.py

import csv
import logging
from typing import Optional

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine

from app.config import CSV_PATH, LOG_LEVEL
from app.db.engine import get_engine
from app.db.schema import MUTABLE_COLUMNS, books
from app.db.store import new_book_id
from app.errors import ValidationError
from app.models.books import validate_book_payload

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

FILE_PATH = CSV_PATH

# CSV header -> payload key
TEXT_COLUMNS = {
    "ISBN": "isbn",
    "AmazonUrl": "amazon-url",
    "Author": "author",
    "Language": "language",
    "Publisher": "publisher",
    "Title": "title",
}
INT_COLUMNS = {
    "Pages": "pages",
    "Year": "year",
}


# ---- Helpers ----

def parse_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_int(value: Optional[str]) -> Optional[int]:
    value = parse_text(value)
    if value is None:
        return None
    return int(value)


def row_to_payload(row: dict) -> dict:
    """
    Turn one CSV row into a request-shaped payload. Blank cells are left out.
    """
    payload = {}
    for header, key in TEXT_COLUMNS.items():
        value = parse_text(row.get(header))
        if value is not None:
            payload[key] = value
    for header, key in INT_COLUMNS.items():
        value = parse_int(row.get(header))
        if value is not None:
            payload[key] = value
    return payload


def upsert_book(conn, book_row: dict) -> None:
    """
    Insert or update a book by isbn (idempotent ingest). Existing ids are kept.

    book_row: dict mapping column names to values, e.g.
      {
        "isbn": "1234567890",
        "amazon_url": "https://www.amazon.com/dp/1234567890",
        "author": "John Doe",
        "language": "English",
        "pages": 250,
        "publisher": "Acme Publishing",
        "title": "The Ultimate Guide to Testing",
        "year": 2023,
      }
    """
    values = {col: book_row.get(col) for col in MUTABLE_COLUMNS}
    stmt = sqlite_insert(books).values(id=new_book_id(), **values)

    # On conflict by isbn, update the other mutable fields
    update_cols = {
        col: getattr(stmt.excluded, col)
        for col in MUTABLE_COLUMNS
        if col != "isbn"
    }

    stmt = stmt.on_conflict_do_update(
        index_elements=[books.c.isbn],
        set_=update_cols,
    )

    conn.execute(stmt)


def parse_books_csv(file_path: str = FILE_PATH):
    books_list = []

    n_rows = 0
    n_errors = 0
    error_examples = []

    seen_isbns: set[str] = set()
    duplicate_isbn_examples: list[str] = []
    duplicate_isbn_count = 0

    with open(file_path, newline="") as f:
        reader = csv.DictReader(f)

        for row in reader:
            n_rows += 1

            try:
                book_row = validate_book_payload(row_to_payload(row))
            except (ValueError, ValidationError) as e:
                n_errors += 1
                if len(error_examples) < 5:
                    error_examples.append(
                        {
                            "row_number": n_rows,
                            "row": dict(row),
                            "error": getattr(e, "errors", None) or repr(e),
                        }
                    )
                continue

            books_list.append(book_row)

            isbn = book_row["isbn"]
            if isbn in seen_isbns:
                duplicate_isbn_count += 1
                if len(duplicate_isbn_examples) < 5:
                    duplicate_isbn_examples.append(
                        f"Duplicate ISBN {isbn!r} at CSV row {n_rows}"
                    )
            else:
                seen_isbns.add(isbn)

    stats = {
        "n_rows": n_rows,
        "n_books": len(books_list),
        "n_errors": n_errors,
        "error_examples": error_examples,
        "n_duplicate_isbns": duplicate_isbn_count,
        "duplicate_isbn_examples": duplicate_isbn_examples,
    }
    return books_list, stats


def load_into_db(books_list, engine: Optional[Engine] = None) -> None:
    engine = engine or get_engine()
    with engine.begin() as conn:
        # Later rows win for a repeated isbn
        for book_row in books_list:
            upsert_book(conn, book_row)


def main():
    books_list, stats = parse_books_csv(FILE_PATH)
    load_into_db(books_list)

    logger.info(f"Total CSV rows read:   {stats['n_rows']}")
    logger.info(f"Books parsed:          {stats['n_books']}")
    logger.info(f"Rows with errors:      {stats['n_errors']}")
    logger.info(
        "Duplicate books (by ISBN): %s",
        stats["n_duplicate_isbns"],
    )
    for example in stats["duplicate_isbn_examples"]:
        logger.warning("Duplicate book example: %s", example)

    if stats["error_examples"]:
        logger.warning("Example errors:")
        for ex in stats["error_examples"]:
            logger.warning("Row %s: %s", ex["row_number"], ex["error"])


if __name__ == "__main__":
    main()
