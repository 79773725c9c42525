# app/config.py

import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DB_URL = os.getenv("BOOKS_DB_URL", "sqlite:///db.sqlite")  # file in project root
DB_ECHO = _env_flag("BOOKS_DB_ECHO")
LOG_LEVEL = os.getenv("BOOKS_LOG_LEVEL", "INFO").upper()
CSV_PATH = os.getenv("BOOKS_CSV_PATH", "data/books.csv")
