"""
Helpers that write catalog records straight to the store.
"""
from datetime import date
from typing import List, Optional

from locallibrary.catalog.models import Author, Book, BookGenre, BookInstance, BookInstanceStatus, Genre
from locallibrary.core.db import CatalogStore


async def add(store: CatalogStore, *entities):
    """Persist entities directly, bypassing the services."""
    async with store.session() as db:
        db.add_all(entities)
        await db.commit()
    return entities[0] if len(entities) == 1 else entities


async def make_author(
    store: CatalogStore,
    first_name: str = "Jane",
    family_name: str = "Austen",
    date_of_birth: Optional[date] = None,
    date_of_death: Optional[date] = None,
) -> Author:
    return await add(
        store,
        Author(
            first_name=first_name,
            family_name=family_name,
            date_of_birth=date_of_birth,
            date_of_death=date_of_death,
        ),
    )


async def make_genre(store: CatalogStore, name: str = "Fantasy") -> Genre:
    return await add(store, Genre(name=name))


async def make_book(
    store: CatalogStore,
    author: Author,
    title: str = "Emma",
    genres: Optional[List[Genre]] = None,
) -> Book:
    book = Book(title=title, author_id=author.id, summary="A novel.", isbn="9780141439587")
    links = [BookGenre(book_id=book.id, genre_id=genre.id) for genre in genres or []]
    await add(store, book)
    if links:
        await add(store, *links)
    return book


async def make_copy(
    store: CatalogStore,
    book: Book,
    imprint: str = "Penguin, 2003",
    status: BookInstanceStatus = BookInstanceStatus.AVAILABLE,
    due_back: Optional[date] = None,
) -> BookInstance:
    return await add(
        store, BookInstance(book_id=book.id, imprint=imprint, status=status, due_back=due_back)
    )
