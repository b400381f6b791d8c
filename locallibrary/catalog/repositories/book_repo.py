from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, select

from locallibrary.catalog.models.book import Book, BookGenre
from locallibrary.catalog.repositories.base_repo import BaseRepository
from locallibrary.core.exceptions import NotFoundException


class BookRepository(BaseRepository[Book]):
    model = Book

    async def list_sorted(self, populate: Iterable[str] = ("author",)) -> List[Book]:
        return await self.find(order_by=[Book.title.asc()], populate=populate)

    async def find_by_author(self, author_id: str) -> List[Book]:
        """Books whose author reference points at ``author_id``."""
        return await self.find(Book.author_id == author_id, order_by=[Book.title.asc()])

    async def find_by_genre(self, genre_id: str) -> List[Book]:
        """Books whose genre set contains ``genre_id``."""
        in_genre = select(BookGenre.book_id).where(BookGenre.genre_id == genre_id)
        return await self.find(Book.id.in_(in_genre), order_by=[Book.title.asc()])

    async def create(self, data: Dict[str, Any], genre_ids: List[str]) -> Book:
        """Insert a book together with its genre references.

        Args:
            data: Column values (title, author_id, summary, isbn)
            genre_ids: Identities of the genres the book belongs to

        Returns:
            The persisted book
        """
        book = Book(**data)
        self.db.add(book)
        await self.db.flush()
        self.db.add_all(BookGenre(book_id=book.id, genre_id=genre_id) for genre_id in genre_ids)
        await self.db.commit()
        await self.db.refresh(book)
        return book

    async def update(
        self, book_id: str, data: Dict[str, Any], genre_ids: Optional[List[str]] = None
    ) -> Book:
        """Replace a book's fields and, when given, its genre set.

        Raises:
            NotFoundException: If the book does not exist
        """
        book = await self.get_by_id(book_id)
        if book is None:
            raise NotFoundException(detail=f"Book {book_id} not found", code="books_not_found")

        allowed_fields = {"title", "author_id", "summary", "isbn"}
        for key, value in data.items():
            if key in allowed_fields:
                setattr(book, key, value)

        if genre_ids is not None:
            await self.db.execute(delete(BookGenre).where(BookGenre.book_id == book_id))
            self.db.add_all(BookGenre(book_id=book_id, genre_id=genre_id) for genre_id in genre_ids)

        await self.db.commit()
        await self.db.refresh(book)
        return book
