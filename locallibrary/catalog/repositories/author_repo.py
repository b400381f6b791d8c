from typing import List

from locallibrary.catalog.models.author import Author
from locallibrary.catalog.repositories.base_repo import BaseRepository


class AuthorRepository(BaseRepository[Author]):
    model = Author

    async def list_sorted(self) -> List[Author]:
        """All authors ordered by family name, then first name."""
        return await self.find(order_by=[Author.family_name.asc(), Author.first_name.asc()])
