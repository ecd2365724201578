from pydantic import BaseModel, field_validator, ConfigDict
from typing import ClassVar
import uuid

# Book create schema
class BookCreate(BaseModel):
    title: str
    summary: str
    author_id: uuid.UUID
    isbn: str | None = None

    @field_validator("title", "summary", mode="before")
    @classmethod
    def trim_and_check(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty")
        return v

# Book summary shown on author pages
class BookSummary(BaseModel):
    id: uuid.UUID
    title: str
    summary: str

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)
