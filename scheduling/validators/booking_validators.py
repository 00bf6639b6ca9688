"""
Booking request validation.

Structural checks run before the booking transaction touches the database:
required fields present, date and time well-formed, service id a UUID.
Brazilian phone numbers are stored in display form, (11) 98765-4321.
Each failure names the offending field so the form can highlight it.
"""

import logging
from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel

from database.models import CUSTOMER_CONTACT_MAX_LENGTH, CUSTOMER_NAME_MAX_LENGTH
from scheduling.exceptions import BookingValidationError
from scheduling.slots import parse_time
from scheduling.utils.whatsapp_link import format_phone_number

logger = logging.getLogger(__name__)


class BookingRequest(BaseModel):
    """Normalised booking request."""
    service_id: UUID
    appointment_date: date
    appointment_time: time
    customer_name: str
    customer_contact: str


def _parse_service_id(value: UUID | str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise BookingValidationError("service_id", f"Invalid service id '{value}'") from None


def _parse_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        # Exactly YYYY-MM-DD: no compact ("20261020") or ISO week forms
        if len(text) != 10:
            raise ValueError(text)
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise BookingValidationError(
            "appointment_date", f"Invalid date '{value}', expected YYYY-MM-DD"
        ) from None


def _parse_time(value: time | str) -> time:
    if isinstance(value, time):
        parsed = value
    else:
        try:
            parsed = parse_time(str(value))
        except ValueError:
            raise BookingValidationError(
                "appointment_time", f"Invalid time '{value}', expected HH:MM"
            ) from None

    # Slots start on whole minutes; ":00" seconds are tolerated, anything else is not a slot
    if parsed.second or parsed.microsecond:
        raise BookingValidationError(
            "appointment_time", f"Invalid time '{value}', slots start on whole minutes"
        )
    return parsed


def _require_text(field: str, value: str | None, max_length: int) -> str:
    cleaned = " ".join((value or "").split())
    if not cleaned:
        raise BookingValidationError(field, "This field is required")
    if len(cleaned) > max_length:
        raise BookingValidationError(field, f"Must be at most {max_length} characters")
    return cleaned


def validate_booking_request(
    service_id: UUID | str,
    appointment_date: date | str,
    appointment_time: time | str,
    customer_name: str | None,
    customer_contact: str | None,
) -> BookingRequest:
    """
    Validate and normalise the raw booking input.

    Fields are checked in form order, so the first missing or malformed
    field is the one reported.

    Raises:
        BookingValidationError: With the failing field name
    """
    request = BookingRequest(
        service_id=_parse_service_id(service_id),
        appointment_date=_parse_date(appointment_date),
        appointment_time=_parse_time(appointment_time),
        customer_name=_require_text("customer_name", customer_name, CUSTOMER_NAME_MAX_LENGTH),
        customer_contact=format_phone_number(
            _require_text("customer_contact", customer_contact, CUSTOMER_CONTACT_MAX_LENGTH)
        ),
    )

    logger.debug(
        "Booking request structurally valid",
        extra={
            "service_id": request.service_id,
            "appointment_date": request.appointment_date.isoformat(),
        },
    )
    return request
