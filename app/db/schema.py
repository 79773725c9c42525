# app/db/schema.py

from sqlalchemy import MetaData, Table, Column, Integer, String, Text

metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("id", String(24), primary_key=True),
    Column("isbn", String(13), nullable=False, unique=True),
    Column("amazon_url", Text),
    Column("author", Text),
    Column("language", Text),
    Column("pages", Integer),
    Column("publisher", Text),
    Column("title", Text, nullable=False),
    Column("year", Integer),
)

# Columns the caller may write; id is assigned by the store.
MUTABLE_COLUMNS = (
    "isbn",
    "amazon_url",
    "author",
    "language",
    "pages",
    "publisher",
    "title",
    "year",
)
