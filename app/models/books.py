# app/models/books.py

import re
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    Field,
    StrictInt,
    StrictStr,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from app.errors import ValidationError

# ISBN-10 (check digit may be X) or ISBN-13, digits only
ISBN_PATTERN = re.compile(r"(?:[0-9]{9}[0-9X]|[0-9]{13})")
BOOK_ID_PATTERN = re.compile(r"[0-9a-f]{24}")

# SQLite INTEGER columns are signed 64-bit
MAX_INTEGER = 2**63 - 1

PageCount = Annotated[StrictInt, Field(ge=0, le=MAX_INTEGER)]
Year = Annotated[StrictInt, Field(ge=-MAX_INTEGER - 1, le=MAX_INTEGER)]

_http_url = TypeAdapter(AnyHttpUrl)


def is_valid_isbn(value: str) -> bool:
    return bool(ISBN_PATTERN.fullmatch(value))


def is_valid_book_id(value: str) -> bool:
    return bool(BOOK_ID_PATTERN.fullmatch(value))


class BookCreate(BaseModel):
    isbn: StrictStr
    amazon_url: Optional[StrictStr] = Field(default=None, alias="amazon-url")
    author: Optional[StrictStr] = None
    language: Optional[StrictStr] = None
    pages: Optional[PageCount] = None
    publisher: Optional[StrictStr] = None
    title: StrictStr
    year: Optional[Year] = None

    class Config:
        extra = "forbid"

    @field_validator("isbn")
    @classmethod
    def check_isbn(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("isbn may not be null")
        if not is_valid_isbn(value):
            raise ValueError("isbn must be 10 or 13 digits (ISBN-10 may end in X)")
        return value

    @field_validator("title")
    @classmethod
    def check_title(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("title may not be null")
        return value

    @field_validator("amazon_url")
    @classmethod
    def check_amazon_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            _http_url.validate_python(value)
        except PydanticValidationError:
            raise ValueError("amazon-url must be an absolute http(s) URL")
        # keep the caller's string, not the normalized Url
        return value


class BookUpdate(BookCreate):
    """
    Same field rules as BookCreate, but every field is optional.
    Fields left out of the payload keep their stored values.
    """

    isbn: Optional[StrictStr] = None
    title: Optional[StrictStr] = None


def _error_location(loc) -> str:
    field = ".".join(str(part) for part in loc)
    return field or "body"


def validate_book_payload(payload: Any, partial: bool = False) -> Dict[str, Any]:
    """
    Check a raw request payload against the book schema.

    Returns a dict keyed by column name containing only the fields the
    caller supplied. Raises app.errors.ValidationError listing every
    rejected field otherwise.
    """
    if not isinstance(payload, dict):
        raise ValidationError(
            "Book payload must be a JSON object",
            errors=[{"field": "body", "message": "expected an object"}],
        )

    schema = BookUpdate if partial else BookCreate

    try:
        book = schema.model_validate(payload)
    except PydanticValidationError as exc:
        errors = [
            {"field": _error_location(err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError("Invalid book payload", errors=errors) from exc

    return book.model_dump(exclude_unset=True)


class BookOut(BaseModel):
    id: str
    isbn: str
    amazon_url: Optional[str] = Field(default=None, alias="amazon-url")
    author: Optional[str] = None
    language: Optional[str] = None
    pages: Optional[int] = None
    publisher: Optional[str] = None
    title: str
    year: Optional[int] = None

    class Config:
        populate_by_name = True


class BookResponse(BaseModel):
    book: BookOut


class BookListResponse(BaseModel):
    books: List[BookOut]


class ErrorDetail(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    detail: str
    errors: Optional[List[ErrorDetail]] = None
