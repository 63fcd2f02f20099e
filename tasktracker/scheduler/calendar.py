"""Working-day calendar used by the task scheduler."""

from datetime import date, timedelta

SATURDAY = 5
SUNDAY = 6


def is_working_day(day: date, work_days_per_week: int) -> bool:
    """Check whether a date is a working day.

    5 work days means Monday to Friday, 6 means Monday to Saturday.
    Any other value (7 included) treats every day as a working day.

    Args:
        day: Calendar date to classify
        work_days_per_week: Number of working days per week

    Returns:
        True if the date is a working day
    """
    weekday = day.weekday()

    if work_days_per_week == 5:
        return weekday not in (SATURDAY, SUNDAY)

    if work_days_per_week == 6:
        return weekday != SUNDAY

    return True


def count_working_days(start: date, end: date, work_days_per_week: int) -> int:
    """Count working days in the inclusive range [start, end].

    Returns 0 when end is before start.
    """
    working_days = 0
    current = start

    while current <= end:
        if is_working_day(current, work_days_per_week):
            working_days += 1
        current += timedelta(days=1)

    return working_days


def next_working_day(day: date, work_days_per_week: int) -> date:
    """Return the first working day strictly after the given date."""
    next_day = day + timedelta(days=1)

    while not is_working_day(next_day, work_days_per_week):
        next_day += timedelta(days=1)

    return next_day
