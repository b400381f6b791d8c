from locallibrary.catalog.repositories.author_repo import AuthorRepository
from locallibrary.catalog.repositories.book_instance_repo import BookInstanceRepository
from locallibrary.catalog.repositories.book_repo import BookRepository
from locallibrary.catalog.repositories.genre_repo import GenreRepository
from locallibrary.catalog.repositories.populate import populate

__all__ = [
    "AuthorRepository",
    "BookInstanceRepository",
    "BookRepository",
    "GenreRepository",
    "populate",
]
