"""Project scheduling - ownership check, load, schedule and persist."""

import logging

from tasktracker.scheduler.scheduler_service import (
    ScheduleResult,
    ScheduleWindow,
    SchedulerService,
)
from tasktracker.state.tasks import TaskRepository

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = "Project not found or access denied"


class ProjectAccessDenied(Exception):
    """The user does not own the project, or it does not exist."""

    def __init__(self, project_id: int, user_id: int):
        super().__init__(ACCESS_DENIED_MESSAGE)
        self.project_id = project_id
        self.user_id = user_id


async def schedule_project_tasks(
    repository: TaskRepository,
    scheduler: SchedulerService,
    project_id: int,
    user_id: int,
    window: ScheduleWindow,
) -> ScheduleResult:
    """Schedule every incomplete task of a project and save the due dates.

    Nothing serializes concurrent calls for the same project; the due
    dates of the last call to commit win.

    Args:
        repository: Task storage
        scheduler: Due-date calculator
        project_id: Project to schedule
        user_id: Requesting user, must own the project
        window: Schedule window

    Returns:
        ScheduleResult from the scheduler

    Raises:
        ProjectAccessDenied: If the user does not own the project
    """
    project = await repository.get_project(project_id, user_id)
    if project is None:
        logger.warning(
            f"[Schedule] User {user_id} denied access to project {project_id}"
        )
        raise ProjectAccessDenied(project_id, user_id)

    tasks = await repository.load_incomplete_tasks(project_id)
    result = scheduler.schedule_tasks(tasks, window)

    if result.tasks_scheduled > 0:
        await repository.persist_due_dates(result.assignments())

    logger.info(
        f"[Schedule] Project {project_id}: {result.message} "
        f"({window.start_date} to {window.end_date})"
    )
    return result
