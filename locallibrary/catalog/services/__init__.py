from locallibrary.catalog.services.aggregation import Aggregate, aggregate, fan_out
from locallibrary.catalog.services.author_service import AuthorService
from locallibrary.catalog.services.book_instance_service import BookInstanceService
from locallibrary.catalog.services.book_service import BookService
from locallibrary.catalog.services.catalog_service import CatalogService
from locallibrary.catalog.services.genre_service import GenreService
from locallibrary.catalog.services.guarded_delete import DeleteOutcome, DeleteResult, guarded_delete

__all__ = [
    "Aggregate",
    "AuthorService",
    "BookInstanceService",
    "BookService",
    "CatalogService",
    "DeleteOutcome",
    "DeleteResult",
    "GenreService",
    "aggregate",
    "fan_out",
    "guarded_delete",
]
