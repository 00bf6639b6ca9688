"""
Unit tests for scheduling/services/availability_service.py

Tests coverage:
- available_slots() pure decision: past, blocked, occupied, too long
- get_available_slots() loading live data through the repository
- Storage failures surface as DataUnavailableError, never as "no slots"
- build_month_calendar() flags
"""

from datetime import date, datetime, time
from types import SimpleNamespace
from unittest.mock import patch
from uuid import uuid4
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.exc import OperationalError

from database.models import Appointment, AppointmentStatus
from scheduling.exceptions import BookingValidationError, DataUnavailableError
from scheduling.services.availability_service import (
    available_slots,
    build_month_calendar,
    business_today,
    get_available_slots,
    is_date_bookable,
)

TODAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
SUNDAY = date(2026, 10, 25)
HOLIDAY = date(2026, 11, 2)

ALL_30_MIN_SLOTS = [time(9, 0), time(9, 30), time(10, 0), time(10, 30), time(11, 0), time(11, 30)]


def booked(start: time, duration: int = 30, status=AppointmentStatus.CONFIRMED, day: date = TUESDAY):
    return SimpleNamespace(
        appointment_date=day,
        appointment_time=start,
        duration_minutes=duration,
        status=status,
    )


def stored_appointment(service, day: date, start: time, status=AppointmentStatus.CONFIRMED):
    return Appointment(
        id=uuid4(),
        service_id=service.id,
        customer_name="Cliente",
        customer_contact="11999990000",
        appointment_date=day,
        appointment_time=start,
        duration_minutes=service.duration_minutes,
        slot_range=Appointment.build_slot_range(start, service.duration_minutes),
        status=status,
    )


class TestIsDateBookable:
    def test_today_is_bookable(self, business_settings):
        assert is_date_bookable(TODAY, business_settings, TODAY) is True

    def test_past_day(self, business_settings):
        assert is_date_bookable(date(2026, 10, 17), business_settings, TODAY) is False

    def test_weekly_day_off(self, business_settings):
        assert is_date_bookable(SUNDAY, business_settings, TODAY) is False

    def test_specific_day_off(self, business_settings):
        assert is_date_bookable(HOLIDAY, business_settings, TODAY) is False


class TestAvailableSlots:
    """Test the pure available_slots() decision."""

    def test_free_day(self, haircut, business_settings):
        assert available_slots(haircut, TUESDAY, business_settings, [], TODAY) == ALL_30_MIN_SLOTS

    def test_confirmed_appointment_removes_slot(self, haircut, business_settings):
        """Confirmed 10:00 booking for 30 minutes on the same day."""
        slots = available_slots(haircut, TUESDAY, business_settings, [booked(time(10, 0))], TODAY)

        assert slots == [time(9, 0), time(9, 30), time(10, 30), time(11, 0), time(11, 30)]

    def test_ninety_minute_service(self, coloring, business_settings):
        slots = available_slots(coloring, TUESDAY, business_settings, [], TODAY)

        assert slots == [time(9, 0), time(9, 30), time(10, 0), time(10, 30)]

    def test_ninety_minute_service_around_booking(self, coloring, business_settings):
        """A 10:00 booking leaves only 10:30 for a 90 minute service."""
        slots = available_slots(coloring, TUESDAY, business_settings, [booked(time(10, 0))], TODAY)

        assert slots == [time(10, 30)]

    def test_past_date_has_no_slots(self, haircut, business_settings):
        assert available_slots(haircut, date(2026, 10, 16), business_settings, [], TODAY) == []

    def test_blocked_date_has_no_slots(self, haircut, business_settings):
        assert available_slots(haircut, SUNDAY, business_settings, [], TODAY) == []
        assert available_slots(haircut, HOLIDAY, business_settings, [], TODAY) == []

    def test_service_longer_than_window(self, business_settings):
        marathon = SimpleNamespace(duration_minutes=240)

        assert available_slots(marathon, TUESDAY, business_settings, [], TODAY) == []

    def test_cancelled_appointment_frees_slot(self, haircut, business_settings):
        cancelled = booked(time(10, 0), status=AppointmentStatus.CANCELLED)

        assert available_slots(haircut, TUESDAY, business_settings, [cancelled], TODAY) == ALL_30_MIN_SLOTS

    def test_datetime_target(self, haircut, business_settings):
        slots = available_slots(haircut, datetime(2026, 10, 20, 18, 0), business_settings, [], TODAY)

        assert slots == ALL_30_MIN_SLOTS

    def test_idempotent(self, haircut, business_settings):
        appointments = [booked(time(9, 0)), booked(time(11, 0))]

        first = available_slots(haircut, TUESDAY, business_settings, appointments, TODAY)
        second = available_slots(haircut, TUESDAY, business_settings, appointments, TODAY)

        assert first == second


class TestGetAvailableSlots:
    """Test get_available_slots() against the in-memory repository."""

    @pytest.mark.asyncio
    async def test_reads_live_appointments(self, fake_db, haircut):
        fake_db.appointments.append(stored_appointment(haircut, TUESDAY, time(10, 0)))

        slots = await get_available_slots(haircut.id, TUESDAY)

        assert time(10, 0) not in slots
        assert len(slots) == 5

    @pytest.mark.asyncio
    async def test_cancelled_rows_do_not_block(self, fake_db, haircut):
        fake_db.appointments.append(
            stored_appointment(haircut, TUESDAY, time(10, 0), status=AppointmentStatus.CANCELLED)
        )

        assert await get_available_slots(haircut.id, TUESDAY) == ALL_30_MIN_SLOTS

    @pytest.mark.asyncio
    async def test_unknown_service(self, fake_db):
        with pytest.raises(BookingValidationError) as exc_info:
            await get_available_slots(uuid4(), TUESDAY)

        assert exc_info.value.field == "service_id"

    @pytest.mark.asyncio
    async def test_inactive_service(self, fake_db, retired_service):
        with pytest.raises(BookingValidationError) as exc_info:
            await get_available_slots(retired_service.id, TUESDAY)

        assert exc_info.value.field == "service_id"

    @pytest.mark.asyncio
    async def test_missing_settings(self, fake_db, haircut):
        fake_db.settings = None

        with pytest.raises(DataUnavailableError):
            await get_available_slots(haircut.id, TUESDAY)

    @pytest.mark.asyncio
    async def test_database_down(self, fake_db, haircut):
        """Storage failure must not look like an empty calendar."""
        fake_db.fail_with = OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(DataUnavailableError):
            await get_available_slots(haircut.id, TUESDAY)


class TestBuildMonthCalendar:
    def test_flags(self, business_settings):
        cells = {c["date"]: c for c in build_month_calendar(date(2026, 10, 1), business_settings, TODAY)}

        assert cells[date(2026, 10, 18)]["past"] is True
        assert cells[date(2026, 10, 18)]["selectable"] is False
        assert cells[TODAY]["is_today"] is True
        assert cells[TODAY]["selectable"] is True
        assert cells[SUNDAY]["blocked"] is True
        assert cells[SUNDAY]["selectable"] is False
        assert cells[TUESDAY]["selectable"] is True

    def test_padding_days_not_selectable(self, business_settings):
        cells = build_month_calendar(date(2026, 11, 1), business_settings, TODAY)
        trailing = cells[-1]

        assert trailing["date"] == date(2026, 12, 5)
        assert trailing["in_month"] is False
        assert trailing["selectable"] is False

    def test_specific_day_off_blocked(self, business_settings):
        cells = {c["date"]: c for c in build_month_calendar(HOLIDAY, business_settings, TODAY)}

        assert cells[HOLIDAY]["blocked"] is True
        assert cells[HOLIDAY]["past"] is False


def test_business_today_uses_configured_timezone():
    """01:30 UTC on the 20th is still the 19th in Sao Paulo."""
    fixed_utc = datetime(2026, 10, 20, 1, 30, tzinfo=ZoneInfo("UTC"))

    with patch("scheduling.services.availability_service.datetime") as mock_datetime:
        mock_datetime.now.side_effect = lambda tz: fixed_utc.astimezone(tz)

        assert business_today() == date(2026, 10, 19)
