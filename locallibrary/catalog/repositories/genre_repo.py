from typing import List, Optional

from locallibrary.catalog.models.genre import Genre
from locallibrary.catalog.repositories.base_repo import BaseRepository


class GenreRepository(BaseRepository[Genre]):
    model = Genre

    async def get_by_name(self, name: str) -> Optional[Genre]:
        """Get a genre by exact (case-sensitive) name."""
        genres = await self.find(Genre.name == name)
        return genres[0] if genres else None

    async def list_sorted(self) -> List[Genre]:
        return await self.find(order_by=[Genre.name.asc()])

    async def get_many(self, genre_ids: List[str]) -> List[Genre]:
        if not genre_ids:
            return []
        return await self.find(Genre.id.in_(genre_ids))
