"""CLI for the task tracker scheduler."""

import argparse
import asyncio
import json
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from tasktracker.core.config import load_app_config, setup_logging
from tasktracker.db.pool import open_database, close_database
from tasktracker.scheduler.scheduler_service import (
    ScheduleResult,
    ScheduleWindow,
    SchedulerService,
    TaskInput,
)
from tasktracker.state.schedule import ProjectAccessDenied, schedule_project_tasks
from tasktracker.state.tasks import TaskRepository


def load_tasks_file(path: Path) -> List[TaskInput]:
    """Read tasks from a JSON file and keep the incomplete ones.

    The file holds a list of objects with ``id`` and ``title`` and
    optionally ``isCompleted`` and ``createdAt``. Tasks are sorted by
    ``createdAt`` when every task has one, otherwise file order is kept.
    Timestamps without an offset are read as UTC.
    """
    with open(path, "r") as f:
        data = json.load(f)

    tasks = []
    for item in data:
        created_at = item.get("createdAt", item.get("created_at"))
        if created_at:
            created_at = datetime.fromisoformat(created_at)
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=timezone.utc)
        tasks.append(
            TaskInput(
                id=item["id"],
                title=item.get("title", ""),
                is_completed=bool(item.get("isCompleted", item.get("is_completed", False))),
                created_at=created_at or None,
            )
        )

    tasks = [t for t in tasks if not t.is_completed]
    if all(t.created_at is not None for t in tasks):
        tasks.sort(key=lambda t: t.created_at)
    return tasks


def build_window(args) -> ScheduleWindow:
    """Build the schedule window from parsed arguments."""
    return ScheduleWindow(
        start_date=args.start,
        end_date=args.end,
        hours_per_day=args.hours_per_day,
        work_days_per_week=args.work_days,
    )


def print_result(result: ScheduleResult, as_json: bool = False) -> None:
    """Print a schedule result."""
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"\n{result.message}\n")
    for i, task in enumerate(result.scheduled_tasks, 1):
        print(f"[{i}] {task.due_date.isoformat()}  #{task.id} {task.title}")


def cmd_preview(args):
    """Preview command handler."""
    tasks = load_tasks_file(Path(args.tasks))
    window = build_window(args)

    result = SchedulerService().schedule_tasks(tasks, window)
    print_result(result, as_json=args.json)


async def _apply(args) -> ScheduleResult:
    db = await open_database()
    try:
        return await schedule_project_tasks(
            TaskRepository(db),
            SchedulerService(),
            project_id=args.project_id,
            user_id=args.user,
            window=build_window(args),
        )
    finally:
        await close_database(db)


def cmd_apply(args):
    """Apply command handler."""
    try:
        result = asyncio.run(_apply(args))
    except ProjectAccessDenied as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print_result(result, as_json=args.json)


def add_window_arguments(parser: argparse.ArgumentParser, hours_per_day: int, work_days: int):
    """Add the schedule window options to a subcommand."""
    parser.add_argument(
        "--start", type=date.fromisoformat, required=True, help="Start date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--end", type=date.fromisoformat, required=True, help="End date, inclusive (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--hours-per-day",
        type=int,
        choices=range(1, 25),
        metavar="{1..24}",
        default=hours_per_day,
        help="Working hours per day",
    )
    parser.add_argument(
        "--work-days",
        type=int,
        choices=range(1, 8),
        metavar="{1..7}",
        default=work_days,
        help="Working days per week (5: Mon-Fri, 6: Mon-Sat, 7: every day)",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")


def main():
    """Main entry point."""
    load_dotenv()
    app_config = load_app_config()
    setup_logging(app_config.log_level)

    parser = argparse.ArgumentParser(
        description="Task Tracker - Auto-schedule project tasks over working days"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Preview command
    preview_parser = subparsers.add_parser(
        "preview", help="Compute a schedule from a JSON task file"
    )
    preview_parser.add_argument("--tasks", "-t", required=True, help="Path to tasks JSON file")
    add_window_arguments(
        preview_parser,
        app_config.default_hours_per_day,
        app_config.default_work_days_per_week,
    )
    preview_parser.set_defaults(func=cmd_preview)

    # Apply command
    apply_parser = subparsers.add_parser(
        "apply", help="Schedule a project's tasks and save the due dates"
    )
    apply_parser.add_argument("project_id", type=int, help="Project ID")
    apply_parser.add_argument("--user", "-u", type=int, required=True, help="Owning user ID")
    add_window_arguments(
        apply_parser,
        app_config.default_hours_per_day,
        app_config.default_work_days_per_week,
    )
    apply_parser.set_defaults(func=cmd_apply)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
