"""
Slot Generator - candidate start times for a working window.

Slots are computed in whole minutes since midnight and returned as
datetime.time values. Nothing is cached: every call recomputes the list.
"""

from datetime import time

from database.models import minute_of_day


def minutes_to_time(minutes: int) -> time:
    """Convert minutes since midnight back to a time-of-day."""
    return time(minutes // 60, minutes % 60)


def parse_time(value: str) -> time:
    """
    Parse "HH:MM" (seconds tolerated, as stored by PostgreSQL TIME) into a time.

    Raises:
        ValueError: If the string is not a valid time-of-day
    """
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(*(int(p) for p in parts))


def generate_slots(
    work_start: time,
    work_end: time,
    interval_minutes: int,
    duration_minutes: int,
) -> list[time]:
    """
    Generate candidate slot start times for a service.

    Walks from work_start in steps of interval_minutes and keeps every start
    whose service would finish by work_end.

    Args:
        work_start: Opening time
        work_end: Closing time
        interval_minutes: Step between consecutive slot starts
        duration_minutes: Length of the service

    Returns:
        Ascending list of slot start times. Empty if the service does not fit
        in the window. Trailing starts are dropped when the interval does not
        divide the window.

    Raises:
        ValueError: If interval_minutes or duration_minutes is not positive

    Example:
        >>> generate_slots(time(9, 0), time(12, 0), 30, 90)
        [time(9, 0), time(9, 30), time(10, 0), time(10, 30)]
    """
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")
    if duration_minutes <= 0:
        raise ValueError(f"duration_minutes must be positive, got {duration_minutes}")

    start = minute_of_day(work_start)
    end = minute_of_day(work_end)

    slots = []
    current = start
    while current < end:
        if current + duration_minutes <= end:
            slots.append(minutes_to_time(current))
        current += interval_minutes

    return slots
