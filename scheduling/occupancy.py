"""
Occupancy Filter - removes candidate slots already taken on a date.

Works on whatever snapshot of appointments the caller passes in; it never
queries the database itself. Intervals are half-open: [start, start + duration).
"""

from datetime import date, time
from typing import Iterable, Protocol

from database.models import ACTIVE_STATUSES, AppointmentStatus, minute_of_day


class BookedSlot(Protocol):
    """Shape of an appointment as seen by the filter (ORM row or plain object)."""

    appointment_date: date
    appointment_time: time
    duration_minutes: int
    status: AppointmentStatus | str


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval overlap: touching ends do not count."""
    return start_a < end_b and start_b < end_a


def holds_slot(appointment: BookedSlot) -> bool:
    """True for pending and confirmed appointments; cancelled ones free their slot."""
    return AppointmentStatus(appointment.status) in ACTIVE_STATUSES


def busy_intervals(target_date: date, appointments: Iterable[BookedSlot]) -> list[tuple[int, int]]:
    """Minute intervals held by active appointments on target_date."""
    intervals = []
    for appointment in appointments:
        if appointment.appointment_date != target_date or not holds_slot(appointment):
            continue
        start = minute_of_day(appointment.appointment_time)
        intervals.append((start, start + appointment.duration_minutes))
    return intervals


def is_slot_free(
    slot: time,
    duration_minutes: int,
    busy: Iterable[tuple[int, int]],
) -> bool:
    """Check one slot against precomputed busy intervals."""
    start = minute_of_day(slot)
    end = start + duration_minutes
    return not any(intervals_overlap(start, end, b_start, b_end) for b_start, b_end in busy)


def filter_available(
    candidate_slots: Iterable[time],
    target_date: date,
    appointments: Iterable[BookedSlot],
    duration_minutes: int,
) -> list[time]:
    """
    Keep the candidate slots that do not overlap an active appointment.

    Args:
        candidate_slots: Slot starts from generate_slots()
        target_date: Day the slots belong to
        appointments: Snapshot of appointments (other dates are ignored)
        duration_minutes: Length of the service being booked

    Returns:
        Subsequence of candidate_slots, original order preserved.

    Example:
        A confirmed 10:00 appointment of 30 minutes removes only 10:00 from
        [09:00, 09:30, 10:00, 10:30] for a 30 minute service.
    """
    busy = busy_intervals(target_date, appointments)
    return [slot for slot in candidate_slots if is_slot_free(slot, duration_minutes, busy)]
