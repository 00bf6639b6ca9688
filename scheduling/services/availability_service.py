"""
Availability Service.

Answers "which slots can be booked for service S on date D". The decision is
made by the pure available_slots() function over explicit inputs (settings,
appointment snapshot, today); get_available_slots() loads those inputs from
PostgreSQL and derives today in the business timezone.

The result is advisory for display. BookingTransaction re-runs the same rules
against live data at commit time.

Usage:
    from scheduling.services.availability_service import get_available_slots

    slots = await get_available_slots(service_id=uuid, target_date=date(2026, 10, 20))
"""

import logging
from datetime import date, datetime, time
from typing import Any, Iterable, Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError

from database.repository import open_repository
from scheduling.calendar_rules import is_date_blocked, to_calendar_day
from scheduling.exceptions import BookingValidationError, DataUnavailableError
from scheduling.month_grid import month_grid
from scheduling.occupancy import BookedSlot, filter_available
from scheduling.slots import generate_slots
from shared.config import get_settings

logger = logging.getLogger(__name__)


class WorkWindow(Protocol):
    """Settings fields the availability rules read."""

    work_start: time
    work_end: time
    slot_interval_minutes: int
    weekday_off: list[int]
    specific_days_off: list[date]


class SizedService(Protocol):
    duration_minutes: int


def business_today() -> date:
    """Current calendar day in the business timezone."""
    return datetime.now(ZoneInfo(get_settings().TIMEZONE)).date()


def is_date_bookable(target_date: date, settings: WorkWindow, today: date) -> bool:
    """A day is bookable when it is not in the past and not blocked."""
    if target_date < today:
        return False
    return not is_date_blocked(target_date, settings.weekday_off, settings.specific_days_off)


def available_slots(
    service: SizedService,
    target_date: date | datetime,
    settings: WorkWindow,
    appointments: Iterable[BookedSlot],
    today: date,
) -> list[time]:
    """
    Bookable slot starts for a service on a date.

    Args:
        service: Anything with duration_minutes
        target_date: Requested day
        settings: Business working window and days off
        appointments: Snapshot of appointments (any dates, any statuses)
        today: Current business day; earlier dates have no slots

    Returns:
        Ascending slot starts; empty for past or blocked days or when the
        service does not fit in the window.
    """
    day = to_calendar_day(target_date)

    if not is_date_bookable(day, settings, today):
        return []

    candidates = generate_slots(
        settings.work_start,
        settings.work_end,
        settings.slot_interval_minutes,
        service.duration_minutes,
    )
    if not candidates:
        return []

    return filter_available(candidates, day, appointments, service.duration_minutes)


async def get_available_slots(service_id: UUID, target_date: date) -> list[time]:
    """
    Load live data and compute the bookable slots for a service on a date.

    Raises:
        BookingValidationError: If the service does not exist or is inactive
        DataUnavailableError: If the database or the settings row is unavailable
    """
    today = business_today()

    try:
        async with open_repository() as repo:
            service = await repo.get_service(service_id)
            settings = await repo.get_business_settings()
            appointments = []
            if service is not None and service.is_active and settings is not None:
                appointments = await repo.list_active_appointments_on(target_date)
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            f"Error loading availability data: {e}",
            extra={"service_id": service_id, "appointment_date": target_date.isoformat()},
            exc_info=True,
        )
        raise DataUnavailableError("Could not load availability data") from e

    if service is None or not service.is_active:
        raise BookingValidationError("service_id", "Service not found or inactive")
    if settings is None:
        raise DataUnavailableError("Business settings are not configured")

    slots = available_slots(service, target_date, settings, appointments, today)

    logger.info(
        f"Found {len(slots)} available slots for service {service.name} on {target_date}",
        extra={"service_id": service_id, "appointment_date": target_date.isoformat()},
    )
    return slots


def build_month_calendar(anchor: date, settings: WorkWindow, today: date) -> list[dict[str, Any]]:
    """
    Month grid cells annotated for the calendar view.

    Each cell carries whether it belongs to the month, whether the business
    is closed that day and whether it is already past. Only cells that are
    in the month and bookable can be selected.
    """
    cells = []
    for cell in month_grid(anchor):
        blocked = is_date_blocked(cell.date, settings.weekday_off, settings.specific_days_off)
        past = cell.date < today
        cells.append({
            "date": cell.date,
            "in_month": cell.in_month,
            "blocked": blocked,
            "past": past,
            "selectable": cell.in_month and not blocked and not past,
            "is_today": cell.date == today,
        })
    return cells
