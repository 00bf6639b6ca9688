"""
Booking notification builder.

Formats the message a customer sends to the business after booking and the
WhatsApp link that carries it. Delivery itself is up to the caller. Everything
here runs after the booking is committed and is best-effort: a failure is
logged and never undoes or fails the booking.
"""

import logging
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from scheduling.calendar_rules import DAY_NAMES_PT, calendar_weekday
from scheduling.utils.whatsapp_link import generate_whatsapp_link

logger = logging.getLogger(__name__)

MONTH_NAMES_PT = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]


@dataclass
class BookingNotification:
    """Customer-facing confirmation text and the link that sends it."""
    message: str
    whatsapp_link: Optional[str]


def format_friendly_date(value: date) -> str:
    """
    Long pt-BR date.

    Example:
        >>> format_friendly_date(date(2026, 10, 20))
        'terça-feira, 20 de outubro de 2026'
    """
    weekday = DAY_NAMES_PT[calendar_weekday(value)]
    month = MONTH_NAMES_PT[value.month - 1]
    return f"{weekday}, {value.day} de {month} de {value.year}"


def build_booking_message(
    customer_name: str,
    service_name: str,
    appointment_date: date,
    appointment_time: time,
) -> str:
    """Message the customer sends to confirm the booking with the business."""
    return (
        f"Olá! Meu nome é {customer_name} e acabei de agendar um horário.\n\n"
        f"Serviço: {service_name}\n"
        f"Data: {format_friendly_date(appointment_date)}\n"
        f"Horário: {appointment_time:%H:%M}"
    )


def notify_booking_created(
    customer_name: str,
    service_name: str,
    appointment_date: date,
    appointment_time: time,
    whatsapp_number: Optional[str],
) -> Optional[BookingNotification]:
    """
    Build the post-booking notification.

    The link is omitted when the business has no WhatsApp number configured.

    Returns:
        BookingNotification, or None if building it failed (logged).
    """
    try:
        message = build_booking_message(
            customer_name, service_name, appointment_date, appointment_time
        )
        link = generate_whatsapp_link(whatsapp_number, message) if whatsapp_number else None
        return BookingNotification(message=message, whatsapp_link=link)
    except Exception as e:
        logger.warning(
            f"Failed to build booking notification (booking still valid): {e}",
            extra={"appointment_date": appointment_date.isoformat()},
        )
        return None
