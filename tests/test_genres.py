"""
Test genre pages.
"""
import pytest
from httpx import AsyncClient

from factories import make_author, make_book, make_genre

pytestmark = pytest.mark.asyncio


class TestGenrePages:
    """Test genre list, detail and create."""

    async def test_create_twice_reuses_genre(self, async_client: AsyncClient):
        first = await async_client.post("/catalog/genre/create", data={"name": "Fantasy"})
        second = await async_client.post("/catalog/genre/create", data={"name": "Fantasy"})

        assert first.status_code == 302
        assert second.status_code == 302
        assert first.headers["location"] == second.headers["location"]

        listing = await async_client.get("/catalog/genres")
        assert listing.text.count(">Fantasy</a>") == 1

    async def test_create_invalid(self, async_client: AsyncClient):
        response = await async_client.post("/catalog/genre/create", data={"name": ""})

        assert response.status_code == 200
        assert "Genre name required." in response.text

    async def test_detail_lists_books(self, async_client: AsyncClient, store):
        author = await make_author(store)
        fantasy = await make_genre(store)
        await make_book(store, author, title="Emma", genres=[fantasy])

        response = await async_client.get(fantasy.url)

        assert response.status_code == 200
        assert "Genre: Fantasy" in response.text
        assert "Emma" in response.text

    async def test_detail_not_found(self, async_client: AsyncClient):
        response = await async_client.get("/catalog/genre/nope")

        assert response.status_code == 404

    async def test_update_not_implemented(self, async_client: AsyncClient, store):
        fantasy = await make_genre(store)

        response = await async_client.get(f"{fantasy.url}/update")

        assert response.status_code == 501


class TestGenreDelete:
    """Test deleting genres."""

    async def test_blocked_by_book(self, async_client: AsyncClient, store):
        author = await make_author(store)
        fantasy = await make_genre(store)
        await make_book(store, author, title="Emma", genres=[fantasy])

        response = await async_client.post(f"{fantasy.url}/delete", data={"genreid": fantasy.id})

        assert response.status_code == 200
        assert "Delete the following books" in response.text

    async def test_delete(self, async_client: AsyncClient, store):
        fantasy = await make_genre(store)

        response = await async_client.post("/catalog/genre/delete", data={"genreid": fantasy.id})

        assert response.status_code == 302
        assert response.headers["location"] == "/catalog/genres"
        assert (await async_client.get(fantasy.url)).status_code == 404

    async def test_delete_missing(self, async_client: AsyncClient):
        response = await async_client.post("/catalog/genre/delete", data={"genreid": "nope"})

        assert response.status_code == 404
