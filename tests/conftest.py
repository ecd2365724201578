import asyncio
import os
from collections.abc import Callable
from datetime import date

# Point settings at SQLite before anything imports the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_catalog.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from catalog.main import app
from catalog.db.base import Base
from catalog.db.session import build_sessionmaker, get_sessionmaker
from catalog.models.author import Author
from catalog.models.book import Book
from catalog.repos.author_repo import AuthorRepository
from catalog.repos.book_repo import BookRepository
from catalog.schemas.author import AuthorForm
from catalog.schemas.book import BookCreate


@pytest.fixture
def test_engine(tmp_path) -> AsyncEngine:
    """Fresh SQLite database file with all tables, one per test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        poolclass=NullPool,
    )

    async def _create_all() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create_all())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(test_engine)


@pytest.fixture
def test_client(session_factory):
    """Create a test client bound to the per-test database."""
    app.dependency_overrides[get_sessionmaker] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_author(session_factory) -> Callable[..., Author]:
    """Insert an author directly through the repository."""

    def _make(
        first_name: str = "Jane",
        family_name: str = "Austen",
        date_of_birth: date | None = None,
        date_of_death: date | None = None,
    ) -> Author:
        async def _create() -> Author:
            async with session_factory() as db:
                return await AuthorRepository.create(
                    db,
                    AuthorForm(
                        first_name=first_name,
                        family_name=family_name,
                        date_of_birth=date_of_birth,
                        date_of_death=date_of_death,
                    ),
                )

        return asyncio.run(_create())

    return _make


@pytest.fixture
def make_book(session_factory) -> Callable[..., Book]:
    """Insert a book for an author."""

    def _make(author: Author, title: str = "Emma", summary: str = "A novel.") -> Book:
        async def _create() -> Book:
            async with session_factory() as db:
                return await BookRepository.create(
                    db, BookCreate(title=title, summary=summary, author_id=author.id)
                )

        return asyncio.run(_create())

    return _make


@pytest.fixture
def count_authors(session_factory) -> Callable[[], int]:
    def _count() -> int:
        async def _list() -> int:
            async with session_factory() as db:
                return len(await AuthorRepository.list(db))

        return asyncio.run(_list())

    return _count
