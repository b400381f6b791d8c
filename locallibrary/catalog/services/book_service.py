from typing import Any, Dict, List, Optional

from locallibrary.catalog.models.book import Book
from locallibrary.catalog.models.book_instance import BookInstance
from locallibrary.catalog.repositories.author_repo import AuthorRepository
from locallibrary.catalog.repositories.book_instance_repo import BookInstanceRepository
from locallibrary.catalog.repositories.book_repo import BookRepository
from locallibrary.catalog.repositories.genre_repo import GenreRepository
from locallibrary.catalog.schemas.book import BookCreate, BookUpdate
from locallibrary.catalog.schemas.forms import FieldError
from locallibrary.catalog.services.aggregation import Aggregate, aggregate, fan_out
from locallibrary.catalog.services.base_service import BaseService
from locallibrary.catalog.services.guarded_delete import DeleteResult, guarded_delete
from locallibrary.core.exceptions import NotFoundException
from locallibrary.logging.setup import get_logger

logger = get_logger(__name__)

BOOK_REFERENCES = ("author", "genres")


def _warn_dangling(books: List[Book]) -> None:
    for book in books:
        if book.author is None:
            logger.warning(f"Book {book.id} references missing author {book.author_id}")


class BookService(BaseService):
    async def list_books(self) -> List[Book]:
        """All books by title, each with its author resolved."""
        books = await self.run(lambda db: BookRepository(db).list_sorted(populate=("author",)))
        _warn_dangling(books)
        return books

    async def _get_book(self, book_id: str, populate=()) -> Optional[Book]:
        return await self.run(lambda db: BookRepository(db).get_by_id(book_id, populate=populate))

    async def _get_instances(self, book_id: str) -> List[BookInstance]:
        return await self.run(lambda db: BookInstanceRepository(db).find_by_book(book_id))

    async def get_book_with_instances(
        self, book_id: str, populate=BOOK_REFERENCES
    ) -> Aggregate[Book, BookInstance]:
        """Fetch a book (author and genres resolved) and its copies.

        Raises:
            NotFoundException: If the book does not exist
        """
        result = await aggregate(
            lambda: self._get_book(book_id, populate=populate),
            lambda: self._get_instances(book_id),
            timeout=self.aggregate_timeout,
        )
        if not result.found:
            raise NotFoundException(detail=f"Book {book_id} not found", code="book_not_found")
        if "author" in populate:
            _warn_dangling([result.parent])
        return result

    async def get_form_options(self) -> Dict[str, Any]:
        """Authors and genres offered by the book form, read concurrently."""
        return await fan_out(
            {
                "authors": lambda: self.run(lambda db: AuthorRepository(db).list_sorted()),
                "genres": lambda: self.run(lambda db: GenreRepository(db).list_sorted()),
            },
            timeout=self.aggregate_timeout,
        )

    async def get_book_for_update(self, book_id: str) -> Dict[str, Any]:
        """The book to edit plus the form options, read concurrently.

        Raises:
            NotFoundException: If the book does not exist
        """
        results = await fan_out(
            {
                "book": lambda: self._get_book(book_id, populate=BOOK_REFERENCES),
                "authors": lambda: self.run(lambda db: AuthorRepository(db).list_sorted()),
                "genres": lambda: self.run(lambda db: GenreRepository(db).list_sorted()),
            },
            timeout=self.aggregate_timeout,
        )
        if results["book"] is None:
            raise NotFoundException(detail=f"Book {book_id} not found", code="book_not_found")
        return results

    async def check_references(self, form: BookCreate) -> List[FieldError]:
        """Report references in a valid form that point at nothing."""
        results = await fan_out(
            {
                "author": lambda: self.run(lambda db: AuthorRepository(db).get_by_id(form.author)),
                "genres": lambda: self.run(lambda db: GenreRepository(db).get_many(form.genre)),
            },
            timeout=self.aggregate_timeout,
        )
        errors = []
        if results["author"] is None:
            errors.append(FieldError(field="author", message="Selected author does not exist."))
        missing = set(form.genre) - {genre.id for genre in results["genres"]}
        if missing:
            errors.append(FieldError(field="genre", message="Selected genre does not exist."))
        return errors

    @staticmethod
    def _columns(form: BookCreate) -> Dict[str, Any]:
        return {
            "title": form.title,
            "author_id": form.author,
            "summary": form.summary,
            "isbn": form.isbn,
        }

    async def create_book(self, form: BookCreate) -> Book:
        book = await self.run(lambda db: BookRepository(db).create(self._columns(form), form.genre))
        logger.info(f"Created book {book.id} ({book.title})")
        return book

    async def update_book(self, book_id: str, form: BookUpdate) -> Book:
        """Replace a book's fields and genre set.

        Raises:
            NotFoundException: If the book does not exist
        """
        book = await self.run(
            lambda db: BookRepository(db).update(book_id, self._columns(form), form.genre)
        )
        logger.info(f"Updated book {book.id} ({book.title})")
        return book

    async def delete_book(self, book_id: str) -> DeleteResult[Book, BookInstance]:
        """Delete a book unless copies of it still exist."""
        return await guarded_delete(
            lambda: self._get_book(book_id),
            lambda: self._get_instances(book_id),
            lambda: self.run(lambda db: BookRepository(db).remove_by_id(book_id)),
            timeout=self.aggregate_timeout,
        )
