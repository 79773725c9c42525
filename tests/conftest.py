import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.main import create_app


@pytest.fixture
def engine():
    # One shared in-memory connection so every request sees the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def app(engine):
    return create_app(engine)


@pytest.fixture
def store(app):
    store = app.state.book_store
    store.create_schema()
    # Clear the table before each test
    store.remove_all()
    return store


@pytest.fixture
def client(app, store):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def new_book():
    return {
        "isbn": "1234567890",
        "amazon-url": "https://www.amazon.com/dp/1234567890",
        "author": "John Doe",
        "language": "English",
        "pages": 250,
        "publisher": "Acme Publishing",
        "title": "The Ultimate Guide to Testing",
        "year": 2023,
    }


@pytest.fixture
def updated_book():
    return {
        "isbn": "0987654321",
        "amazon-url": "https://www.amazon.com/dp/0987654321",
        "author": "Jane Doe",
        "language": "Spanish",
        "pages": 300,
        "publisher": "Acme Publishing",
        "title": "The Ultimate Guide to Testing 2.0",
        "year": 2024,
    }


@pytest.fixture
def invalid_book():
    return {
        "isbn": "invalid",
        "amazon-url": "not-a-url",
        "author": 123,
        "language": True,
        "pages": "not-a-number",
        "publisher": {},
        "title": None,
        "year": "not-a-number",
    }
