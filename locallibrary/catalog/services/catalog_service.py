from typing import Dict

from locallibrary.catalog.models.book_instance import BookInstanceStatus
from locallibrary.catalog.repositories.author_repo import AuthorRepository
from locallibrary.catalog.repositories.book_instance_repo import BookInstanceRepository
from locallibrary.catalog.repositories.book_repo import BookRepository
from locallibrary.catalog.repositories.genre_repo import GenreRepository
from locallibrary.catalog.services.aggregation import fan_out
from locallibrary.catalog.services.base_service import BaseService


class CatalogService(BaseService):
    async def get_counts(self) -> Dict[str, int]:
        """Record counts shown on the home page, read concurrently."""
        return await fan_out(
            {
                "book_count": lambda: self.run(lambda db: BookRepository(db).count()),
                "book_instance_count": lambda: self.run(
                    lambda db: BookInstanceRepository(db).count_by_status()
                ),
                "book_instance_available_count": lambda: self.run(
                    lambda db: BookInstanceRepository(db).count_by_status(BookInstanceStatus.AVAILABLE)
                ),
                "author_count": lambda: self.run(lambda db: AuthorRepository(db).count()),
                "genre_count": lambda: self.run(lambda db: GenreRepository(db).count()),
            },
            timeout=self.aggregate_timeout,
        )
