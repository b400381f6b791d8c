from typing import List

from locallibrary.catalog.models.author import Author
from locallibrary.catalog.models.book import Book
from locallibrary.catalog.repositories.author_repo import AuthorRepository
from locallibrary.catalog.repositories.book_repo import BookRepository
from locallibrary.catalog.schemas.author import AuthorCreate
from locallibrary.catalog.services.aggregation import Aggregate, aggregate
from locallibrary.catalog.services.base_service import BaseService
from locallibrary.catalog.services.guarded_delete import DeleteResult, guarded_delete
from locallibrary.core.exceptions import NotFoundException
from locallibrary.logging.setup import get_logger

logger = get_logger(__name__)


class AuthorService(BaseService):
    async def list_authors(self) -> List[Author]:
        return await self.run(lambda db: AuthorRepository(db).list_sorted())

    async def _get_author(self, author_id: str):
        return await self.run(lambda db: AuthorRepository(db).get_by_id(author_id))

    async def _get_books(self, author_id: str) -> List[Book]:
        return await self.run(lambda db: BookRepository(db).find_by_author(author_id))

    async def get_author_with_books(self, author_id: str) -> Aggregate[Author, Book]:
        """Fetch an author and the books referencing it.

        Raises:
            NotFoundException: If the author does not exist
        """
        result = await aggregate(
            lambda: self._get_author(author_id),
            lambda: self._get_books(author_id),
            timeout=self.aggregate_timeout,
        )
        if not result.found:
            raise NotFoundException(detail=f"Author {author_id} not found", code="author_not_found")
        return result

    async def create_author(self, form: AuthorCreate) -> Author:
        author = await self.run(lambda db: AuthorRepository(db).save(Author(**form.model_dump())))
        logger.info(f"Created author {author.id} ({author.name})")
        return author

    async def delete_author(self, author_id: str) -> DeleteResult[Author, Book]:
        """Delete an author unless books still reference it."""
        return await guarded_delete(
            lambda: self._get_author(author_id),
            lambda: self._get_books(author_id),
            lambda: self.run(lambda db: AuthorRepository(db).remove_by_id(author_id)),
            timeout=self.aggregate_timeout,
        )
