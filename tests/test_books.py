"""
Test book pages.
"""
import pytest
from httpx import AsyncClient

from factories import make_author, make_book, make_copy, make_genre
from locallibrary.catalog.models import BookInstanceStatus

pytestmark = pytest.mark.asyncio


def book_form(author_id: str, **overrides):
    data = {"title": "Emma", "author": author_id, "summary": "A novel.", "isbn": "9780141439587"}
    data.update(overrides)
    return data


class TestBookPages:
    """Test book list, detail and create."""

    async def test_list_sorted_by_title_with_author(self, async_client: AsyncClient, store):
        author = await make_author(store)
        await make_book(store, author, title="Persuasion")
        await make_book(store, author, title="Emma")

        response = await async_client.get("/catalog/books")

        assert response.status_code == 200
        assert response.text.index("Emma") < response.text.index("Persuasion")
        assert "Austen, Jane" in response.text

    async def test_create_form_offers_authors_and_genres(self, async_client: AsyncClient, store):
        author = await make_author(store)
        fantasy = await make_genre(store)

        response = await async_client.get("/catalog/book/create")

        assert response.status_code == 200
        assert f'value="{author.id}"' in response.text
        assert f'value="{fantasy.id}"' in response.text

    async def test_create_and_view(self, async_client: AsyncClient, store):
        author = await make_author(store)
        fantasy = await make_genre(store, "Fantasy")
        poetry = await make_genre(store, "Poetry")

        response = await async_client.post(
            "/catalog/book/create", data=book_form(author.id, genre=[fantasy.id, poetry.id])
        )

        assert response.status_code == 302
        detail = await async_client.get(response.headers["location"])
        assert detail.status_code == 200
        assert "Title: Emma" in detail.text
        assert "Austen, Jane" in detail.text
        assert "Fantasy" in detail.text
        assert "Poetry" in detail.text
        assert "There are no copies of this book in the library." in detail.text

    async def test_create_invalid_keeps_checked_genres(self, async_client: AsyncClient, store):
        author = await make_author(store)
        fantasy = await make_genre(store)

        response = await async_client.post(
            "/catalog/book/create", data=book_form(author.id, title="", genre=[fantasy.id])
        )

        assert response.status_code == 200
        assert "Title must not be empty." in response.text
        assert "checked" in response.text

    async def test_create_with_unknown_author(self, async_client: AsyncClient, store):
        response = await async_client.post("/catalog/book/create", data=book_form("ghost"))

        assert response.status_code == 200
        assert "Selected author does not exist." in response.text
        assert "There are no books." in (await async_client.get("/catalog/books")).text

    async def test_detail_lists_copies(self, async_client: AsyncClient, store):
        author = await make_author(store)
        book = await make_book(store, author)
        await make_copy(store, book, imprint="Penguin, 2003", status=BookInstanceStatus.AVAILABLE)

        response = await async_client.get(book.url)

        assert "Penguin, 2003" in response.text
        assert "Available" in response.text

    async def test_detail_not_found(self, async_client: AsyncClient):
        response = await async_client.get("/catalog/book/nope")

        assert response.status_code == 404


class TestBookUpdate:
    """Test editing books."""

    async def test_form_prefilled(self, async_client: AsyncClient, store):
        author = await make_author(store)
        fantasy = await make_genre(store)
        book = await make_book(store, author, genres=[fantasy])

        response = await async_client.get(f"{book.url}/update")

        assert response.status_code == 200
        assert 'value="Emma"' in response.text
        assert "checked" in response.text

    async def test_update(self, async_client: AsyncClient, store):
        author = await make_author(store)
        other = await make_author(store, "Charlotte", "Bronte")
        book = await make_book(store, author)

        response = await async_client.post(
            f"{book.url}/update", data=book_form(other.id, title="Jane Eyre")
        )

        assert response.status_code == 302
        assert response.headers["location"] == book.url
        detail = await async_client.get(book.url)
        assert "Title: Jane Eyre" in detail.text
        assert "Bronte, Charlotte" in detail.text

    async def test_update_missing_book(self, async_client: AsyncClient, store):
        author = await make_author(store)

        get_response = await async_client.get("/catalog/book/nope/update")
        post_response = await async_client.post("/catalog/book/nope/update", data=book_form(author.id))

        assert get_response.status_code == 404
        assert post_response.status_code == 404

    async def test_invalid_update_of_missing_book(self, async_client: AsyncClient, store):
        author = await make_author(store)

        response = await async_client.post(
            "/catalog/book/nope/update", data=book_form(author.id, title="")
        )

        assert response.status_code == 404

    async def test_invalid_update_rerenders_form(self, async_client: AsyncClient, store):
        author = await make_author(store)
        book = await make_book(store, author)

        response = await async_client.post(f"{book.url}/update", data=book_form(author.id, title=""))

        assert response.status_code == 200
        assert "Title must not be empty." in response.text
        assert "Update Book" in response.text


class TestBookDelete:
    """Test deleting books."""

    async def test_blocked_by_copy(self, async_client: AsyncClient, store):
        author = await make_author(store)
        book = await make_book(store, author)
        await make_copy(store, book, imprint="Penguin, 2003")

        response = await async_client.post(f"{book.url}/delete", data={"id": book.id})

        assert response.status_code == 200
        assert "Delete the following copies" in response.text
        assert "Penguin, 2003" in response.text

    async def test_delete(self, async_client: AsyncClient, store):
        author = await make_author(store)
        fantasy = await make_genre(store)
        book = await make_book(store, author, genres=[fantasy])

        response = await async_client.post("/catalog/book/delete", data={"id": book.id})

        assert response.status_code == 302
        assert response.headers["location"] == "/catalog/books"
        assert (await async_client.get(book.url)).status_code == 404
        # The genre is free to go once the book is gone
        genre_delete = await async_client.post(f"{fantasy.url}/delete", data={})
        assert genre_delete.status_code == 302
