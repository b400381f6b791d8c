from locallibrary.catalog.schemas.author import AuthorCreate
from locallibrary.catalog.schemas.book import BookCreate, BookUpdate
from locallibrary.catalog.schemas.book_instance import BookInstanceCreate
from locallibrary.catalog.schemas.forms import FieldError, FormResult, intake, sanitize
from locallibrary.catalog.schemas.genre import GenreCreate

__all__ = [
    "AuthorCreate",
    "BookCreate",
    "BookUpdate",
    "BookInstanceCreate",
    "FieldError",
    "FormResult",
    "GenreCreate",
    "intake",
    "sanitize",
]
