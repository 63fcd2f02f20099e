"""asyncpg pool holding the task tracker's PostgreSQL connections."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import asyncpg

from tasktracker.core.config import DatabaseSettings, load_database_settings

logger = logging.getLogger(__name__)


class Database:
    """Query helpers over a lazily opened asyncpg pool."""

    def __init__(self, settings: DatabaseSettings):
        self.settings = settings
        self.pool: Optional[asyncpg.Pool] = None

    @property
    def is_connected(self) -> bool:
        return self.pool is not None

    async def connect(self) -> None:
        if self.pool is not None:
            return

        s = self.settings
        logger.info(f"Opening PostgreSQL pool {s.user}@{s.host}:{s.port}/{s.database}")
        self.pool = await asyncpg.create_pool(**s.model_dump())

    async def disconnect(self) -> None:
        if self.pool is None:
            return

        await self.pool.close()
        self.pool = None
        logger.info("PostgreSQL pool closed")

    @asynccontextmanager
    async def connection(self):
        """Borrow a connection from the pool.

        Raises:
            RuntimeError: If connect() has not been awaited
        """
        if self.pool is None:
            raise RuntimeError("Database pool not initialized. Call connect() first.")

        async with self.pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self):
        """Borrow a connection inside a transaction.

        Commits when the block exits normally, rolls back if it raises.
        """
        async with self.connection() as conn:
            async with conn.transaction():
                yield conn

    async def execute(self, query: str, *args) -> str:
        async with self.connection() as conn:
            return await conn.execute(query, *args)

    async def fetch(self, query: str, *args) -> list:
        async with self.connection() as conn:
            return await conn.fetch(query, *args)

    async def fetchrow(self, query: str, *args):
        async with self.connection() as conn:
            return await conn.fetchrow(query, *args)


async def open_database(settings: Optional[DatabaseSettings] = None) -> Database:
    """Create a Database and open its pool.

    Args:
        settings: Connection settings, read from the environment when omitted

    Returns:
        Connected Database
    """
    db = Database(settings or load_database_settings())
    await db.connect()
    return db


async def close_database(db: Optional[Database]) -> None:
    """Close a Database opened with open_database."""
    if db is not None:
        await db.disconnect()
