from fastapi import APIRouter

from locallibrary.catalog.api.v1 import authors, book_instances, books, genres, home

CATALOG_PREFIX = "/catalog"

catalog_router = APIRouter()

catalog_router.include_router(home.router, prefix=CATALOG_PREFIX, tags=["home"])
catalog_router.include_router(authors.router, prefix=CATALOG_PREFIX, tags=["authors"])
catalog_router.include_router(books.router, prefix=CATALOG_PREFIX, tags=["books"])
catalog_router.include_router(genres.router, prefix=CATALOG_PREFIX, tags=["genres"])
catalog_router.include_router(book_instances.router, prefix=CATALOG_PREFIX, tags=["book instances"])
