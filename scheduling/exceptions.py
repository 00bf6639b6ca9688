"""
Scheduling error taxonomy.

Callers branch on the exception class:
- BookingValidationError: re-render the form field named by `field`
- SlotConflictError: re-query availability and let the customer pick again
- DataUnavailableError: storage or settings did not answer; nothing was written
"""

from datetime import date, time


class SchedulingError(Exception):
    """Base exception for scheduling engine errors."""
    pass


class BookingValidationError(SchedulingError):
    """Raised when a booking request is malformed or missing a required field."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class SlotConflictError(SchedulingError):
    """Raised when the requested slot was taken before the booking committed."""

    def __init__(self, appointment_date: date, appointment_time: time):
        super().__init__(
            f"Slot {appointment_date.isoformat()} {appointment_time:%H:%M} is no longer available"
        )
        self.appointment_date = appointment_date
        self.appointment_time = appointment_time


class DataUnavailableError(SchedulingError):
    """Raised when the database or the business settings cannot be read."""
    pass
