"""Scheduler module - Due-date assignment over a working-day calendar."""

from tasktracker.scheduler.calendar import (
    count_working_days,
    is_working_day,
    next_working_day,
)
from tasktracker.scheduler.scheduler_service import (
    ScheduledTask,
    ScheduleResult,
    ScheduleWindow,
    SchedulerService,
    TaskInput,
)

__all__ = [
    "count_working_days",
    "is_working_day",
    "next_working_day",
    "ScheduledTask",
    "ScheduleResult",
    "ScheduleWindow",
    "SchedulerService",
    "TaskInput",
]
