"""Month Grid Builder - padded Sunday-first weeks for the booking calendar view."""

import calendar
from datetime import date, datetime
from typing import NamedTuple

from scheduling.calendar_rules import to_calendar_day

# Week rows start on Sunday, matching the calendar weekday numbering
_SUNDAY_FIRST = calendar.Calendar(firstweekday=calendar.SUNDAY)


class GridDay(NamedTuple):
    """One cell of the month grid."""

    date: date
    in_month: bool


def month_grid(anchor: date | datetime) -> list[GridDay]:
    """
    Build the day cells for the month containing anchor.

    The result always covers whole weeks (a multiple of 7 cells). Cells before
    the 1st and after the last day are filled with dates of the adjacent
    months and flagged in_month=False.

    Example:
        October 2026 starts on a Thursday, so the grid opens with
        Sunday 2026-09-27 ... Wednesday 2026-09-30 (in_month=False).
    """
    day = to_calendar_day(anchor)
    return [
        GridDay(cell, cell.month == day.month)
        for cell in _SUNDAY_FIRST.itermonthdates(day.year, day.month)
    ]
