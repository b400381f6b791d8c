from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100


class GenreCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("required", "Genre name required.")
        if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "length",
                "Genre name must be between {min} and {max} characters.",
                {"min": NAME_MIN_LENGTH, "max": NAME_MAX_LENGTH},
            )
        return v
