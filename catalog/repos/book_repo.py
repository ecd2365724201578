import uuid
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.book import Book
from catalog.schemas.book import BookCreate, BookSummary


class BookRepository:
    @staticmethod
    # Create a new book
    async def create(db: AsyncSession, data: BookCreate) -> Book:
        book = Book(**data.model_dump())
        db.add(book)
        await db.commit()
        await db.refresh(book)
        return book

    @staticmethod
    # List books by author
    async def list_by_author(db: AsyncSession, author_id: uuid.UUID) -> list[Book]:
        stmt = select(Book).where(Book.author_id == author_id).order_by(Book.title)
        return list((await db.scalars(stmt)).all())

    @staticmethod
    # Title/summary of books by author
    async def summaries_by_author(
        db: AsyncSession, author_id: uuid.UUID
    ) -> list[BookSummary]:
        stmt = (
            select(Book.id, Book.title, Book.summary)
            .where(Book.author_id == author_id)
            .order_by(Book.title)
        )
        rows = (await db.execute(stmt)).all()
        return [BookSummary.model_validate(row) for row in rows]

    @staticmethod
    # Count books by author
    async def count_by_author(db: AsyncSession, author_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(Book).where(Book.author_id == author_id)
        return int(await db.scalar(stmt) or 0)
