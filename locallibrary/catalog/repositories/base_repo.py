from typing import Any, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from locallibrary.catalog.repositories.populate import populate as populate_options
from locallibrary.core.db import Base
from locallibrary.core.exceptions import NotFoundException

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Entity store operations shared by every catalog collection.

    ``find``, ``get_by_id``, ``count``, ``save`` and ``remove_by_id`` are the
    whole contract. Store failures (``SQLAlchemyError``) are not caught here.
    """

    model: Type[ModelType]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(
        self,
        *criteria: Any,
        order_by: Optional[Sequence[Any]] = None,
        populate: Iterable[str] = (),
    ) -> List[ModelType]:
        """Return every entity matching the filter criteria.

        Args:
            criteria: SQLAlchemy filter expressions, combined with AND
            order_by: Columns to sort by
            populate: Reference fields to resolve on each result

        Returns:
            Matching entities (possibly empty)
        """
        query = select(self.model).where(*criteria)
        if order_by:
            query = query.order_by(*order_by)
        options = populate_options(self.model, populate)
        if options:
            query = query.options(*options)
        result = await self.db.execute(query)
        return list(result.scalars().unique().all())

    async def get_by_id(
        self, entity_id: str, populate: Iterable[str] = ()
    ) -> Optional[ModelType]:
        """Get an entity by identity.

        Returns:
            The entity, or None if not found.
        """
        query = select(self.model).where(self.model.id == entity_id)
        options = populate_options(self.model, populate)
        if options:
            query = query.options(*options)
        result = await self.db.execute(query)
        return result.scalars().first()

    async def count(self, *criteria: Any) -> int:
        query = select(func.count()).select_from(self.model).where(*criteria)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def save(self, entity: ModelType) -> ModelType:
        """Insert or update an entity and commit."""
        self.db.add(entity)
        await self.db.commit()
        await self.db.refresh(entity)
        return entity

    async def remove_by_id(self, entity_id: str) -> ModelType:
        """Delete an entity by identity.

        Raises:
            NotFoundException: If no entity has that identity
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundException(
                detail=f"{self.model.__name__} {entity_id} not found",
                code=f"{self.model.__tablename__}_not_found",
            )
        await self.db.delete(entity)
        await self.db.commit()
        return entity
