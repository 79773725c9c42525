# app/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from app.api.books import router as books_router
from app.config import LOG_LEVEL
from app.db.engine import get_engine
from app.db.store import BookStore
from app.errors import BookStoreError, ValidationError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


async def book_store_error_handler(request: Request, exc: BookStoreError) -> JSONResponse:
    logger.info(
        "%s %s -> %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Missing or unparsable bodies are client errors like any other bad payload
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    logger.info("%s %s -> 400: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": errors},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    app.state.book_store.create_schema()
    yield


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    app = FastAPI(
        title="Book Catalog API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.book_store = BookStore(engine or get_engine())

    app.add_exception_handler(BookStoreError, book_store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(books_router)
    return app


app = create_app()
