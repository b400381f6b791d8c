from locallibrary.catalog.models.author import Author
from locallibrary.catalog.models.genre import Genre
from locallibrary.catalog.models.book import Book, BookGenre
from locallibrary.catalog.models.book_instance import BookInstance, BookInstanceStatus

__all__ = ["Author", "Genre", "Book", "BookGenre", "BookInstance", "BookInstanceStatus"]
