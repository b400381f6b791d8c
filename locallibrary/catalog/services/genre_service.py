from typing import List, Tuple

from sqlalchemy.exc import IntegrityError

from locallibrary.catalog.models.book import Book
from locallibrary.catalog.models.genre import Genre
from locallibrary.catalog.repositories.book_repo import BookRepository
from locallibrary.catalog.repositories.genre_repo import GenreRepository
from locallibrary.catalog.schemas.genre import GenreCreate
from locallibrary.catalog.services.aggregation import Aggregate, aggregate
from locallibrary.catalog.services.base_service import BaseService
from locallibrary.catalog.services.guarded_delete import DeleteResult, guarded_delete
from locallibrary.core.exceptions import NotFoundException
from locallibrary.logging.setup import get_logger

logger = get_logger(__name__)


class GenreService(BaseService):
    async def list_genres(self) -> List[Genre]:
        return await self.run(lambda db: GenreRepository(db).list_sorted())

    async def _get_genre(self, genre_id: str):
        return await self.run(lambda db: GenreRepository(db).get_by_id(genre_id))

    async def _get_books(self, genre_id: str) -> List[Book]:
        return await self.run(lambda db: BookRepository(db).find_by_genre(genre_id))

    async def get_genre_with_books(self, genre_id: str) -> Aggregate[Genre, Book]:
        """Fetch a genre and the books filed under it.

        Raises:
            NotFoundException: If the genre does not exist
        """
        result = await aggregate(
            lambda: self._get_genre(genre_id),
            lambda: self._get_books(genre_id),
            timeout=self.aggregate_timeout,
        )
        if not result.found:
            raise NotFoundException(detail=f"Genre {genre_id} not found", code="genre_not_found")
        return result

    async def create_genre(self, form: GenreCreate) -> Tuple[Genre, bool]:
        """Create a genre, reusing an existing one with the same exact name.

        Returns:
            The genre and whether it was newly created
        """
        existing = await self.run(lambda db: GenreRepository(db).get_by_name(form.name))
        if existing is not None:
            logger.info(f"Genre '{form.name}' already exists as {existing.id}")
            return existing, False

        try:
            genre = await self.run(lambda db: GenreRepository(db).save(Genre(name=form.name)))
        except IntegrityError:
            # A concurrent request inserted the same name first
            existing = await self.run(lambda db: GenreRepository(db).get_by_name(form.name))
            if existing is None:
                raise
            logger.info(f"Genre '{form.name}' was created concurrently as {existing.id}")
            return existing, False

        logger.info(f"Created genre {genre.id} ({genre.name})")
        return genre, True

    async def delete_genre(self, genre_id: str) -> DeleteResult[Genre, Book]:
        """Delete a genre unless books are still filed under it."""
        return await guarded_delete(
            lambda: self._get_genre(genre_id),
            lambda: self._get_books(genre_id),
            lambda: self.run(lambda db: GenreRepository(db).remove_by_id(genre_id)),
            timeout=self.aggregate_timeout,
        )
