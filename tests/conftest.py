"""
pytest Fixtures for Library Catalog Tests

Every test gets its own SQLite in-memory database with foreign keys
switched on, so the referential rules behave as they do in production.
The app's get_db dependency is overridden to use that database.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"

from collections.abc import Generator

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_catalog.client.api import ApiClient
from library_catalog.database import Base, enable_sqlite_foreign_keys, get_db
from library_catalog.main import app
from library_catalog.models import Author, Book

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def engine():
    """
    Create a fresh SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole test;
    without it the in-memory database would disappear between
    connections.
    """
    engine = enable_sqlite_foreign_keys(
        create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Session on the test database; commits are real."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def override_db(db_session: Session) -> Generator[None, None, None]:
    """Route the app's get_db dependency to the test session."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_db) -> Generator[TestClient, None, None]:
    """HTTP test client for the app on the test database."""
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def api(override_db):
    """ApiClient talking to the app in-process over ASGI."""
    transport = httpx.ASGITransport(app=app)
    async with ApiClient("http://testserver", transport=transport) as api_client:
        yield api_client


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(name="George Orwell")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book written by sample_author."""
    book = Book(title="1984", author_id=sample_author.id)
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def second_author(db_session: Session) -> Author:
    """Create another author to move books to."""
    author = Author(name="Aldous Huxley")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author
