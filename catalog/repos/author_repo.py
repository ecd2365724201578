import uuid
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.author import Author
from catalog.schemas.author import AuthorForm


class AuthorRepository:

    @staticmethod
    # Create a new author
    async def create(db: AsyncSession, data: AuthorForm) -> Author:
        author = Author(**data.model_dump())
        db.add(author)
        await db.commit()
        await db.refresh(author)
        return author

    @staticmethod
    # List authors by family name
    async def list(db: AsyncSession) -> list[Author]:
        stmt = select(Author).order_by(Author.family_name.asc(), Author.first_name.asc())
        return list((await db.scalars(stmt)).all())

    @staticmethod
    # Get an author by ID
    async def get(db: AsyncSession, author_id: uuid.UUID) -> Author | None:
        return await db.get(Author, author_id)

    @staticmethod
    # Replace an author's fields by ID
    async def update(
        db: AsyncSession, author_id: uuid.UUID, data: AuthorForm
    ) -> Author | None:
        author = await db.get(Author, author_id)
        if author is None:
            return None
        for field, value in data.model_dump().items():
            setattr(author, field, value)
        await db.commit()
        await db.refresh(author)
        return author

    @staticmethod
    # Delete an author by ID
    async def delete(db: AsyncSession, author_id: uuid.UUID) -> bool:
        result = await db.execute(delete(Author).where(Author.id == author_id))
        await db.commit()
        return bool(result.rowcount)
