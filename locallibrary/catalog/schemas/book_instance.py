from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from locallibrary.catalog.models.book_instance import BookInstanceStatus


class BookInstanceCreate(BaseModel):
    book: str
    imprint: str = Field(max_length=255)
    status: BookInstanceStatus = BookInstanceStatus.MAINTENANCE
    due_back: Optional[date] = Field(default=None, validate_default=True)

    @field_validator("book", mode="before")
    @classmethod
    def require_book(cls, v):
        if not v:
            raise PydanticCustomError("required", "Book must be specified.")
        return v

    @field_validator("imprint", mode="before")
    @classmethod
    def require_imprint(cls, v):
        if not v:
            raise PydanticCustomError("required", "Imprint must be specified.")
        return v

    @field_validator("due_back")
    @classmethod
    def due_back_when_loaned(cls, v: Optional[date], info: ValidationInfo) -> Optional[date]:
        if v is None and info.data.get("status") == BookInstanceStatus.LOANED:
            raise PydanticCustomError("required", "A loaned copy needs a due back date.")
        return v
