from typing import Iterable, List, Optional

from locallibrary.catalog.models.book_instance import BookInstance, BookInstanceStatus
from locallibrary.catalog.repositories.base_repo import BaseRepository


class BookInstanceRepository(BaseRepository[BookInstance]):
    model = BookInstance

    async def list_all(self, populate: Iterable[str] = ("book",)) -> List[BookInstance]:
        return await self.find(
            order_by=[BookInstance.status.asc(), BookInstance.imprint.asc()],
            populate=populate,
        )

    async def find_by_book(self, book_id: str) -> List[BookInstance]:
        """Copies whose book reference points at ``book_id``."""
        return await self.find(BookInstance.book_id == book_id, order_by=[BookInstance.imprint.asc()])

    async def count_by_status(self, status: Optional[BookInstanceStatus] = None) -> int:
        if status is None:
            return await self.count()
        return await self.count(BookInstance.status == status)
