"""Scheduler API routes.

Provides the endpoint that assigns due dates to a project's open tasks.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Header, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from tasktracker.core.config import load_app_config
from tasktracker.db.pool import Database
from tasktracker.scheduler.scheduler_service import ScheduleWindow, SchedulerService
from tasktracker.state.schedule import ProjectAccessDenied, schedule_project_tasks
from tasktracker.state.tasks import TaskRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["scheduler"])

scheduler_service = SchedulerService()


# Request/Response models
class ScheduleRequest(BaseModel):
    """Schedule window for a project.

    Omitted hoursPerDay and workDaysPerWeek fall back to the configured
    defaults.
    """

    model_config = ConfigDict(populate_by_name=True)

    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    hours_per_day: Optional[int] = Field(default=None, ge=1, le=24, alias="hoursPerDay")
    work_days_per_week: Optional[int] = Field(default=None, ge=1, le=7, alias="workDaysPerWeek")


class ScheduledTaskResponse(BaseModel):
    """A task with its new due date."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    is_completed: bool = Field(alias="isCompleted")


class ScheduleResponse(BaseModel):
    """Response after scheduling a project."""

    model_config = ConfigDict(populate_by_name=True)

    scheduled_tasks: List[ScheduledTaskResponse] = Field(
        default_factory=list, alias="scheduledTasks"
    )
    message: str
    tasks_scheduled: int = Field(alias="tasksScheduled")


# Database dependency - will be set by main.py
_db: Optional[Database] = None


def set_database(db: Optional[Database]) -> None:
    """Set the database instance for routes."""
    global _db
    _db = db


def get_db() -> Database:
    """Get the database instance."""
    if _db is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return _db


def parse_user_id(x_user_id: Optional[str]) -> int:
    """Read the authenticated user ID set by the auth proxy."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing user identity")
    try:
        return int(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user identity")


@router.post("/{project_id}/scheduler/schedule", response_model=ScheduleResponse)
async def schedule_tasks(
    project_id: int,
    request: ScheduleRequest,
    x_user_id: Optional[str] = Header(default=None),
):
    """Auto-schedule a project's incomplete tasks.

    Spreads the working hours between startDate and endDate evenly over
    the open tasks, oldest first, and saves the resulting due dates.
    """
    user_id = parse_user_id(x_user_id)
    db = get_db()
    app_config = load_app_config()

    window = ScheduleWindow(
        start_date=request.start_date,
        end_date=request.end_date,
        hours_per_day=request.hours_per_day or app_config.default_hours_per_day,
        work_days_per_week=request.work_days_per_week or app_config.default_work_days_per_week,
    )

    try:
        result = await schedule_project_tasks(
            TaskRepository(db),
            scheduler_service,
            project_id=project_id,
            user_id=user_id,
            window=window,
        )
    except ProjectAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))
    except Exception as e:
        logger.error(f"Error scheduling project {project_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return ScheduleResponse(**result.to_dict())
