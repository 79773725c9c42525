# app/db/engine.py

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.config import DB_ECHO, DB_URL


def get_engine(url: Optional[str] = None) -> Engine:
    # BOOKS_DB_ECHO=1 prints SQL in the terminal
    return create_engine(url or DB_URL, echo=DB_ECHO, future=True)
