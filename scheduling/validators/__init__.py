"""
Booking request validators.

Structural checks that run before BookingTransaction opens a transaction.
"""

from scheduling.validators.booking_validators import (
    BookingRequest,
    validate_booking_request,
)

__all__ = ["BookingRequest", "validate_booking_request"]
