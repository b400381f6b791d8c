"""
Core database module for the application.

Provides the declarative base shared by the catalog models and ``CatalogStore``,
the explicitly constructed owner of the async engine and session factory.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import Column, DateTime, event, func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

logger = logging.getLogger("db")


def generate_id() -> str:
    """Generate a new entity identity."""
    return uuid.uuid4().hex


class CustomBase:
    """Base class for all models with common timestamp columns."""

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


Base = declarative_base(cls=CustomBase)


class CatalogStore:
    """Owns the database engine and hands out sessions.

    The store is created once per application and passed to whatever needs it;
    ``connect`` and ``close`` bracket its lifetime. Every call to ``session``
    opens an independent ``AsyncSession`` so concurrent reads never share one.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self, create_tables: bool = True) -> None:
        """Create the engine and session factory, optionally creating tables."""
        if self._engine is not None:
            return

        engine = create_async_engine(self.database_url, echo=self.echo, pool_pre_ping=True)

        if engine.dialect.name == "sqlite":

            @event.listens_for(engine.sync_engine, "connect")
            def enable_sqlite_fks(dbapi_connection, connection_record):
                """Enable foreign key constraints in SQLite."""
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self._engine = engine
        self._sessionmaker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        if create_tables:
            # Import models so they are registered on Base.metadata
            import locallibrary.catalog.models  # noqa: F401

            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        logger.info(f"Connected to catalog store ({engine.url.render_as_string(hide_password=True)})")

    async def close(self) -> None:
        """Dispose the engine. Safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Catalog store closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a database session.

        Yields:
            AsyncSession: SQLAlchemy async session

        Raises:
            RuntimeError: If the store has not been connected
        """
        if self._sessionmaker is None:
            raise RuntimeError("CatalogStore.connect() must be awaited before use")

        async with self._sessionmaker() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                logger.debug(f"Session rolled back: {e}")
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """
        Check if database connection is working.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
                return True
        except (SQLAlchemyError, RuntimeError) as e:
            logger.error(f"Database connection check failed: {e}")
            return False
