from datetime import date
from typing import Optional

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

NAME_MAX_LENGTH = 100


class AuthorCreate(BaseModel):
    first_name: str
    family_name: str
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("required", "First name must be specified.")
        if len(v) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "too_long", "First name must be at most {max} characters.", {"max": NAME_MAX_LENGTH}
            )
        return v

    @field_validator("family_name")
    @classmethod
    def validate_family_name(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("required", "Family name must be specified.")
        if not v.isalnum():
            raise PydanticCustomError(
                "not_alphanumeric", "Family name has non-alphanumeric characters."
            )
        if len(v) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "too_long", "Family name must be at most {max} characters.", {"max": NAME_MAX_LENGTH}
            )
        return v
