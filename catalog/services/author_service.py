from __future__ import annotations
import asyncio
import uuid
from dataclasses import dataclass, field
from enum import Enum
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.models.author import Author
from catalog.models.book import Book
from catalog.repos.author_repo import AuthorRepository
from catalog.repos.book_repo import BookRepository
from catalog.schemas.author import AuthorForm
from catalog.schemas.book import BookSummary


@dataclass
class AuthorWithBooks:
    author: Author | None
    books_by_author: list[Book] | list[BookSummary] = field(default_factory=list)

    @property
    def has_books(self) -> bool:
        return len(self.books_by_author) > 0


class DeleteOutcome(str, Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    HAS_BOOKS = "has_books"


async def _author(sessions: async_sessionmaker[AsyncSession], author_id: uuid.UUID) -> Author | None:
    async with sessions() as db:
        return await AuthorRepository.get(db, author_id)


async def _summaries(sessions: async_sessionmaker[AsyncSession], author_id: uuid.UUID) -> list[BookSummary]:
    async with sessions() as db:
        return await BookRepository.summaries_by_author(db, author_id)


async def _books(sessions: async_sessionmaker[AsyncSession], author_id: uuid.UUID) -> list[Book]:
    async with sessions() as db:
        return await BookRepository.list_by_author(db, author_id)


class AuthorService:
    @staticmethod
    # List authors
    async def list_authors(db: AsyncSession) -> list[Author]:
        return await AuthorRepository.list(db)

    @staticmethod
    # Get author
    async def get_author(db: AsyncSession, author_id: uuid.UUID) -> Author | None:
        return await AuthorRepository.get(db, author_id)

    @staticmethod
    # Author plus title/summary of their books, queried concurrently
    async def get_author_detail(
        sessions: async_sessionmaker[AsyncSession], author_id: uuid.UUID
    ) -> AuthorWithBooks:
        author, books = await asyncio.gather(
            _author(sessions, author_id),
            _summaries(sessions, author_id),
        )
        return AuthorWithBooks(author=author, books_by_author=books)

    @staticmethod
    # Author plus every dependent book, queried concurrently
    async def get_author_with_books(
        sessions: async_sessionmaker[AsyncSession], author_id: uuid.UUID
    ) -> AuthorWithBooks:
        author, books = await asyncio.gather(
            _author(sessions, author_id),
            _books(sessions, author_id),
        )
        return AuthorWithBooks(author=author, books_by_author=books)

    @staticmethod
    # Create author
    async def create_author(db: AsyncSession, data: AuthorForm) -> Author:
        return await AuthorRepository.create(db, data)

    @staticmethod
    # Update author
    async def update_author(
        db: AsyncSession, author_id: uuid.UUID, data: AuthorForm
    ) -> Author | None:
        return await AuthorRepository.update(db, author_id, data)

    @staticmethod
    # Delete author unless books still reference it
    async def delete_author(
        sessions: async_sessionmaker[AsyncSession], author_id: uuid.UUID
    ) -> tuple[DeleteOutcome, AuthorWithBooks]:
        found = await AuthorService.get_author_with_books(sessions, author_id)
        if found.author is None:
            return DeleteOutcome.NOT_FOUND, found
        if found.has_books:
            return DeleteOutcome.HAS_BOOKS, found

        async with sessions() as db:
            # Re-check inside the deleting session
            if await BookRepository.count_by_author(db, author_id):
                found.books_by_author = await BookRepository.list_by_author(db, author_id)
                return DeleteOutcome.HAS_BOOKS, found
            _ = await AuthorRepository.delete(db, author_id)
        return DeleteOutcome.DELETED, found
