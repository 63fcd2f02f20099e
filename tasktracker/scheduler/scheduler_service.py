"""Scheduler Service - Assigns due dates to a project's incomplete tasks."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tasktracker.scheduler.calendar import (
    count_working_days,
    is_working_day,
    next_working_day,
)

logger = logging.getLogger(__name__)

NO_TASKS_MESSAGE = "No incomplete tasks to schedule"


@dataclass
class TaskInput:
    """Input task for scheduling."""

    id: int
    title: str
    is_completed: bool = False
    created_at: Optional[datetime] = None


@dataclass
class ScheduleWindow:
    """Time window the tasks are spread over."""

    start_date: date
    end_date: date
    hours_per_day: int = 8
    work_days_per_week: int = 5


@dataclass
class ScheduledTask:
    """A task with its assigned due date."""

    id: int
    title: str
    due_date: date
    is_completed: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date.isoformat(),
            "isCompleted": self.is_completed,
        }


@dataclass
class ScheduleResult:
    """Result of scheduling tasks."""

    message: str
    tasks_scheduled: int = 0
    scheduled_tasks: List[ScheduledTask] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "scheduledTasks": [t.to_dict() for t in self.scheduled_tasks],
            "message": self.message,
            "tasksScheduled": self.tasks_scheduled,
        }

    def assignments(self) -> List[Tuple[int, date]]:
        """(task id, due date) pairs in scheduling order."""
        return [(t.id, t.due_date) for t in self.scheduled_tasks]


class SchedulerService:
    """Spreads the working hours of a window evenly across tasks.

    Stateless: every call works only on its arguments. Loading tasks and
    persisting due dates is the caller's job.
    """

    def schedule_tasks(
        self,
        tasks: Sequence[TaskInput],
        window: ScheduleWindow,
    ) -> ScheduleResult:
        """Assign a due date to every task.

        Tasks must already be filtered to incomplete ones and sorted by
        creation time; the order is kept as given.

        Hours per task use integer division, so any remainder of the
        window's total hours is left unused. An hours_per_day below zero
        counts as zero, which puts every task on its own working day.

        Args:
            tasks: Incomplete tasks, oldest first
            window: Schedule window and calendar parameters

        Returns:
            ScheduleResult with one entry per task, in input order
        """
        if not tasks:
            return ScheduleResult(message=NO_TASKS_MESSAGE)

        hours_per_day = max(window.hours_per_day, 0)
        work_days = window.work_days_per_week
        working_days = count_working_days(window.start_date, window.end_date, work_days)
        total_work_hours = working_days * hours_per_day
        hours_per_task = total_work_hours // len(tasks)

        logger.debug(
            f"Scheduling {len(tasks)} tasks: {working_days} working days, "
            f"{total_work_hours}h total, {hours_per_task}h per task"
        )

        current_date = window.start_date
        if not is_working_day(current_date, work_days):
            current_date = next_working_day(current_date, work_days)

        hours_accumulated = 0
        scheduled: List[ScheduledTask] = []

        for task in tasks:
            hours_accumulated += hours_per_task

            # Spill over into following working days once a day is full
            while hours_accumulated > hours_per_day:
                current_date = next_working_day(current_date, work_days)
                hours_accumulated -= hours_per_day

            scheduled.append(
                ScheduledTask(
                    id=task.id,
                    title=task.title,
                    due_date=current_date,
                    is_completed=task.is_completed,
                )
            )

            current_date = next_working_day(current_date, work_days)

        return ScheduleResult(
            message=f"Successfully scheduled {len(scheduled)} tasks",
            tasks_scheduled=len(scheduled),
            scheduled_tasks=scheduled,
        )
