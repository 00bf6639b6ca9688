"""
Calendar Rules - closed day detection for the business calendar.

Single source of truth for "is this day bookable at all" as far as the
business configuration is concerned. Past dates are NOT handled here: the
caller compares against today (see availability_service.available_slots).

Weekday numbering follows the calendar view: 0=Sunday, 1=Monday, ..., 6=Saturday.

Usage:
    from scheduling.calendar_rules import is_date_blocked

    if is_date_blocked(date(2026, 10, 25), settings.weekday_off, settings.specific_days_off):
        print("Closed")
"""

from datetime import date, datetime
from typing import Iterable

# pt-BR day names indexed by calendar weekday (0=Sunday)
DAY_NAMES_PT = ["domingo", "segunda-feira", "terça-feira", "quarta-feira", "quinta-feira", "sexta-feira", "sábado"]


def to_calendar_day(value: date | datetime) -> date:
    """Drop the time-of-day component so comparisons are by calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def calendar_weekday(value: date | datetime) -> int:
    """
    Weekday with Sunday as day 0.

    Python's date.weekday() starts at Monday=0, so shift by one.

    Example:
        >>> calendar_weekday(date(2026, 10, 18))  # Sunday
        0
        >>> calendar_weekday(date(2026, 10, 24))  # Saturday
        6
    """
    return (value.weekday() + 1) % 7


def is_date_blocked(
    target_date: date | datetime,
    weekday_off: Iterable[int],
    specific_days_off: Iterable[date | datetime],
) -> bool:
    """
    Check if a date is closed for bookings.

    Args:
        target_date: Day to check (a datetime is reduced to its date)
        weekday_off: Weekly days off (0=Sunday ... 6=Saturday)
        specific_days_off: One-off closures (holidays, vacations)

    Returns:
        True if the weekday is a weekly day off or the day is a specific day off.

    Example:
        >>> is_date_blocked(date(2026, 10, 18), [0], [])  # Sunday off
        True
        >>> is_date_blocked(date(2026, 12, 25), [], [date(2026, 12, 25)])
        True
        >>> is_date_blocked(date(2026, 10, 20), [0], [date(2026, 12, 25)])
        False
    """
    day = to_calendar_day(target_date)

    if calendar_weekday(day) in set(weekday_off):
        return True

    return day in {to_calendar_day(d) for d in specific_days_off}
