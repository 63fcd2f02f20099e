"""Pytest configuration and fixtures."""

import os
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta, timezone
from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest

from tasktracker.scheduler.scheduler_service import TaskInput

# Set test environment
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_HOST"] = "localhost"
os.environ["DB_NAME"] = "tasktracker_test"


# 2024-03-04 is a Monday
MONDAY = date(2024, 3, 4)


def make_tasks(count: int) -> List[TaskInput]:
    """Build incomplete tasks with ascending creation times."""
    base = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    return [
        TaskInput(
            id=i + 1,
            title=f"Task {i + 1}",
            is_completed=False,
            created_at=base + timedelta(minutes=i),
        )
        for i in range(count)
    ]


@pytest.fixture
def monday() -> date:
    """A Monday to anchor schedule windows."""
    return MONDAY


@pytest.fixture
def mock_db():
    """Create a mock database with a transaction-capable connection."""
    db = MagicMock()
    db.fetchrow = AsyncMock()
    db.fetch = AsyncMock()
    db.execute = AsyncMock()

    conn = MagicMock()
    conn.executemany = AsyncMock()

    @asynccontextmanager
    async def fake_transaction():
        yield conn

    db.transaction = fake_transaction
    db.conn = conn
    return db


@pytest.fixture
def task_factory():
    """Factory for incomplete tasks ordered by creation time."""
    return make_tasks
