"""Tests for database connection pool."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from tasktracker.core.config import DatabaseSettings
from tasktracker.db.pool import Database, close_database, open_database


def make_pool():
    """Build a mock asyncpg pool whose connection opens a mock transaction."""
    tx = MagicMock()
    tx.__aenter__ = AsyncMock(return_value=None)
    tx.__aexit__ = AsyncMock(return_value=False)

    conn = MagicMock()
    conn.transaction = MagicMock(return_value=tx)
    conn.execute = AsyncMock(return_value="UPDATE 1")
    conn.fetch = AsyncMock(return_value=[{"id": 1}])
    conn.fetchrow = AsyncMock(return_value={"id": 1})

    pool = MagicMock()
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
    pool.close = AsyncMock()
    return pool, conn, tx


@pytest.fixture
def settings():
    return DatabaseSettings(host="db-host", port=5433, database="tracker", user="u", password="p")


class TestDatabaseConnection:
    """Tests for opening and closing the pool."""

    @pytest.mark.asyncio
    async def test_connect_passes_settings_to_asyncpg(self, settings):
        """connect() opens a pool with every setting as a keyword."""
        pool, _, _ = make_pool()
        db = Database(settings)

        with patch("asyncpg.create_pool", AsyncMock(return_value=pool)) as mock_create:
            await db.connect()

        mock_create.assert_awaited_once_with(
            host="db-host",
            port=5433,
            database="tracker",
            user="u",
            password="p",
            min_size=1,
            max_size=10,
        )
        assert db.pool is pool

    @pytest.mark.asyncio
    async def test_is_connected_follows_pool(self, settings):
        """is_connected is true only between connect() and disconnect()."""
        pool, _, _ = make_pool()
        db = Database(settings)
        assert db.is_connected is False

        with patch("asyncpg.create_pool", AsyncMock(return_value=pool)):
            await db.connect()
        assert db.is_connected is True

        await db.disconnect()
        assert db.is_connected is False
        pool.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_twice_keeps_one_pool(self, settings):
        """A second connect() does not open another pool."""
        pool, _, _ = make_pool()
        db = Database(settings)

        with patch("asyncpg.create_pool", AsyncMock(return_value=pool)) as mock_create:
            await db.connect()
            await db.connect()

        assert mock_create.await_count == 1

    @pytest.mark.asyncio
    async def test_disconnect_without_pool(self, settings):
        """disconnect() before connect() does nothing."""
        db = Database(settings)

        await db.disconnect()

        assert db.pool is None

    @pytest.mark.asyncio
    async def test_connection_requires_pool(self, settings):
        """Borrowing a connection before connect() raises."""
        db = Database(settings)

        with pytest.raises(RuntimeError, match="not initialized"):
            async with db.connection():
                pass


class TestDatabaseTransaction:
    """Tests for Database.transaction."""

    @pytest.mark.asyncio
    async def test_commits_on_clean_exit(self, settings):
        """The transaction block exits without an exception."""
        pool, conn, tx = make_pool()
        db = Database(settings)
        db.pool = pool

        async with db.transaction() as borrowed:
            assert borrowed is conn
            await borrowed.execute("UPDATE tasks SET due_date = $2 WHERE id = $1", 1, None)

        tx.__aenter__.assert_awaited_once()
        assert tx.__aexit__.await_args.args[0] is None

    @pytest.mark.asyncio
    async def test_rolls_back_on_error(self, settings):
        """An exception inside the block reaches the transaction and propagates."""
        pool, _, tx = make_pool()
        db = Database(settings)
        db.pool = pool

        with pytest.raises(ValueError, match="bad row"):
            async with db.transaction():
                raise ValueError("bad row")

        assert tx.__aexit__.await_args.args[0] is ValueError


class TestDatabaseQueries:
    """Tests for the query helpers."""

    @pytest.mark.asyncio
    async def test_helpers_use_pooled_connection(self, settings):
        """execute, fetch and fetchrow delegate to a borrowed connection."""
        pool, conn, _ = make_pool()
        db = Database(settings)
        db.pool = pool

        assert await db.execute("SELECT 1") == "UPDATE 1"
        assert await db.fetch("SELECT id FROM tasks") == [{"id": 1}]
        assert await db.fetchrow("SELECT id FROM tasks WHERE id = $1", 1) == {"id": 1}
        conn.fetchrow.assert_awaited_once_with("SELECT id FROM tasks WHERE id = $1", 1)


class TestOpenCloseDatabase:
    """Tests for open_database and close_database."""

    @pytest.mark.asyncio
    async def test_open_reads_environment(self, monkeypatch):
        """Without explicit settings the DB_* variables are used."""
        monkeypatch.setenv("DB_HOST", "env-host")
        monkeypatch.setenv("DB_POOL_MAX", "4")
        pool, _, _ = make_pool()

        with patch("asyncpg.create_pool", AsyncMock(return_value=pool)):
            db = await open_database()

        assert db.is_connected is True
        assert db.settings.host == "env-host"
        assert db.settings.max_size == 4

    @pytest.mark.asyncio
    async def test_close_disconnects(self, settings):
        pool, _, _ = make_pool()
        with patch("asyncpg.create_pool", AsyncMock(return_value=pool)):
            db = await open_database(settings)

        await close_database(db)

        assert db.is_connected is False
        pool.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_none_is_noop(self):
        await close_database(None)
