"""Task Repository - Project and task persistence for the scheduler.

Reads a project's incomplete tasks and writes back the due dates the
scheduler assigns.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tasktracker.db.pool import Database
from tasktracker.scheduler.scheduler_service import TaskInput

logger = logging.getLogger(__name__)


async def ensure_tables(db: Database) -> None:
    """Create projects and tasks tables if not exists.

    Args:
        db: Database instance
    """
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS projects (
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL,
            title TEXT NOT NULL,
            description TEXT,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
        """
    )
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS tasks (
            id SERIAL PRIMARY KEY,
            project_id INTEGER NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            title VARCHAR(200) NOT NULL,
            description VARCHAR(1000),
            due_date DATE,
            is_completed BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
        """
    )
    await db.execute(
        "CREATE INDEX IF NOT EXISTS idx_tasks_project_open ON tasks (project_id, is_completed, created_at)"
    )
    logger.info("[Tasks] Ensured projects and tasks tables exist")


class TaskRepository:
    """Loads tasks for scheduling and stores their due dates."""

    def __init__(self, db: Database):
        self.db = db

    async def get_project(
        self,
        project_id: int,
        user_id: int,
    ) -> Optional[Dict[str, Any]]:
        """Get a project if it belongs to the given user.

        Args:
            project_id: Project ID
            user_id: ID of the user who must own the project

        Returns:
            Project record, or None if missing or owned by someone else
        """
        row = await self.db.fetchrow(
            """
            SELECT id, user_id, title, description, created_at
            FROM projects
            WHERE id = $1 AND user_id = $2
            """,
            project_id,
            user_id,
        )
        return dict(row) if row else None

    async def load_incomplete_tasks(self, project_id: int) -> List[TaskInput]:
        """List a project's incomplete tasks, oldest first.

        Args:
            project_id: Project ID

        Returns:
            TaskInput list ordered by creation time
        """
        rows = await self.db.fetch(
            """
            SELECT id, title, is_completed, created_at
            FROM tasks
            WHERE project_id = $1 AND NOT is_completed
            ORDER BY created_at ASC, id ASC
            """,
            project_id,
        )
        return [
            TaskInput(
                id=row["id"],
                title=row["title"],
                is_completed=row["is_completed"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    async def persist_due_dates(
        self,
        assignments: Sequence[Tuple[int, date]],
    ) -> int:
        """Write due dates in a single transaction.

        Args:
            assignments: (task id, due date) pairs

        Returns:
            Number of tasks updated
        """
        if not assignments:
            return 0

        async with self.db.transaction() as conn:
            await conn.executemany(
                "UPDATE tasks SET due_date = $2 WHERE id = $1",
                [(task_id, due_date) for task_id, due_date in assignments],
            )

        logger.info(f"[Tasks] Persisted due dates for {len(assignments)} tasks")
        return len(assignments)
