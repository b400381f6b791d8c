from typing import List

from locallibrary.catalog.models.book import Book
from locallibrary.catalog.models.book_instance import BookInstance
from locallibrary.catalog.repositories.book_instance_repo import BookInstanceRepository
from locallibrary.catalog.repositories.book_repo import BookRepository
from locallibrary.catalog.schemas.book_instance import BookInstanceCreate
from locallibrary.catalog.schemas.forms import FieldError
from locallibrary.catalog.services.base_service import BaseService
from locallibrary.core.exceptions import NotFoundException
from locallibrary.logging.setup import get_logger

logger = get_logger(__name__)


class BookInstanceService(BaseService):
    async def list_book_instances(self) -> List[BookInstance]:
        instances = await self.run(lambda db: BookInstanceRepository(db).list_all(populate=("book",)))
        for instance in instances:
            if instance.book is None:
                logger.warning(f"Copy {instance.id} references missing book {instance.book_id}")
        return instances

    async def get_book_instance(self, instance_id: str) -> BookInstance:
        """
        Raises:
            NotFoundException: If the copy does not exist
        """
        instance = await self.run(
            lambda db: BookInstanceRepository(db).get_by_id(instance_id, populate=("book",))
        )
        if instance is None:
            raise NotFoundException(
                detail=f"Book copy {instance_id} not found", code="book_instance_not_found"
            )
        return instance

    async def list_books(self) -> List[Book]:
        return await self.run(lambda db: BookRepository(db).list_sorted(populate=()))

    async def check_references(self, form: BookInstanceCreate) -> List[FieldError]:
        book = await self.run(lambda db: BookRepository(db).get_by_id(form.book))
        if book is None:
            return [FieldError(field="book", message="Selected book does not exist.")]
        return []

    async def create_book_instance(self, form: BookInstanceCreate) -> BookInstance:
        instance = BookInstance(
            book_id=form.book,
            imprint=form.imprint,
            status=form.status,
            due_back=form.due_back,
        )
        instance = await self.run(lambda db: BookInstanceRepository(db).save(instance))
        logger.info(f"Created book copy {instance.id} of book {instance.book_id}")
        return instance

    async def delete_book_instance(self, instance_id: str) -> BookInstance:
        """A copy has no dependents, so it is removed directly.

        Raises:
            NotFoundException: If the copy does not exist
        """
        instance = await self.run(lambda db: BookInstanceRepository(db).remove_by_id(instance_id))
        logger.info(f"Deleted book copy {instance_id}")
        return instance
