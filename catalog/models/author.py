from __future__ import annotations
from datetime import date
from sqlalchemy import Date, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import uuid
from catalog.core.config import settings
from catalog.db.base import Base

NAME_MAX_LENGTH = 100

#Author
class Author(Base):
    __tablename__: str = "authors"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    family_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False, index=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_of_death: Mapped[date | None] = mapped_column(Date, nullable=True)

    @property
    def name(self) -> str:
        """'Family, First', or empty when either part is missing."""
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        birth = self.date_of_birth.isoformat() if self.date_of_birth else ""
        death = self.date_of_death.isoformat() if self.date_of_death else ""
        if not birth and not death:
            return ""
        return f"{birth} - {death}"

    @property
    def url(self) -> str:
        return f"{settings.authors_path}/{self.id}"
