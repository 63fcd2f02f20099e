"""State management module for the task tracker."""

from .schedule import (
    ACCESS_DENIED_MESSAGE,
    ProjectAccessDenied,
    schedule_project_tasks,
)
from .tasks import TaskRepository, ensure_tables

__all__ = [
    "ACCESS_DENIED_MESSAGE",
    "ProjectAccessDenied",
    "schedule_project_tasks",
    "TaskRepository",
    "ensure_tables",
]
