from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from locallibrary.core.db import CatalogStore

T = TypeVar("T")


class BaseService:
    """Shared plumbing for the catalog services.

    Each store operation runs in a session of its own, which is what lets the
    reads of a fan-out proceed concurrently.
    """

    def __init__(self, store: CatalogStore, aggregate_timeout: Optional[float] = None):
        self.store = store
        self.aggregate_timeout = aggregate_timeout

    async def run(self, operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """Run one repository operation in a fresh session."""
        async with self.store.session() as db:
            return await operation(db)
