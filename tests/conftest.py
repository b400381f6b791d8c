"""
Test configuration and fixtures for the Local Library catalog tests.
"""
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient

from locallibrary.core.config import Settings
from locallibrary.core.db import CatalogStore
from locallibrary.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        APP_ENV="testing",
        DEBUG=False,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        LOG_LEVEL="WARNING",
        LOG_REQUESTS=True,
        _env_file=None,
    )


@pytest_asyncio.fixture
async def store(settings: Settings) -> AsyncGenerator[CatalogStore, None]:
    """A connected store with freshly created tables."""
    store = CatalogStore(settings.DATABASE_URL)
    await store.connect(create_tables=True)
    try:
        yield store
    finally:
        await store.close()


@pytest.fixture
def app(settings: Settings, store: CatalogStore) -> FastAPI:
    """Create app instance for testing."""
    return create_app(settings=settings, store=store)


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Return an async client for testing."""
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
