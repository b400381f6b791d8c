from typing import List

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from locallibrary.catalog.models.book import Book

REQUIRED_MESSAGES = {
    "title": "Title must not be empty.",
    "author": "Author must not be empty.",
    "summary": "Summary must not be empty.",
    "isbn": "ISBN must not be empty.",
}


class BookCreate(BaseModel):
    title: str = Field(max_length=255)
    author: str
    summary: str
    isbn: str = Field(max_length=32)
    genre: List[str] = Field(default_factory=list)

    @field_validator("title", "author", "summary", "isbn", mode="before")
    @classmethod
    def require_value(cls, v, info: ValidationInfo):
        if not v:
            raise PydanticCustomError("required", REQUIRED_MESSAGES[info.field_name])
        return v

    @field_validator("genre")
    @classmethod
    def unique_genres(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))

    @classmethod
    def from_book(cls, book: Book) -> "BookCreate":
        """Build form values from a stored book (its genres must be populated)."""
        return cls.model_construct(
            title=book.title,
            author=book.author_id,
            summary=book.summary,
            isbn=book.isbn,
            genre=book.genre_ids,
        )


BookUpdate = BookCreate
