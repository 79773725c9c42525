# app/api/books.py

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from app.db.store import BookStore
from app.models.books import (
    BookListResponse,
    BookOut,
    BookResponse,
    ErrorResponse,
)

router = APIRouter(prefix="/books", tags=["books"])

BAD_REQUEST = {400: {"model": ErrorResponse}}
NOT_FOUND = {404: {"model": ErrorResponse}}
CONFLICT = {409: {"model": ErrorResponse}}


def get_book_store(request: Request) -> BookStore:
    return request.app.state.book_store


def _book_response(record: dict) -> BookResponse:
    return BookResponse(book=BookOut(**record))


@router.get("", response_model=BookListResponse)
def list_books(store: BookStore = Depends(get_book_store)) -> BookListResponse:
    """
    Return every book, ordered by title.
    """
    return BookListResponse(books=[BookOut(**row) for row in store.list_all()])


@router.post(
    "",
    response_model=BookResponse,
    status_code=201,
    responses={**BAD_REQUEST, **CONFLICT},
)
def create_book(
    payload: Any = Body(..., description="Book fields; `id` is assigned by the server"),
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    return _book_response(store.create(payload))


@router.get(
    "/isbn/{isbn}",
    response_model=BookResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def get_book_by_isbn(isbn: str, store: BookStore = Depends(get_book_store)) -> BookResponse:
    return _book_response(store.find_by_isbn(isbn))


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def get_book(book_id: str, store: BookStore = Depends(get_book_store)) -> BookResponse:
    """
    Return a single book by its id.
    """
    return _book_response(store.find_by_id(book_id))


@router.put(
    "/{isbn}",
    response_model=BookResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT},
)
def update_book(
    isbn: str,
    payload: Any = Body(...),
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    """
    Replace the fields of the book identified by isbn with those in the body.
    """
    return _book_response(store.update_by_isbn(isbn, payload))


@router.delete(
    "/{book_id}",
    response_model=BookResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def delete_book(book_id: str, store: BookStore = Depends(get_book_store)) -> BookResponse:
    return _book_response(store.delete_by_id(book_id))
