"""
Scheduling services module.

Services:
- availability_service: Bookable slots for a service on a date, month calendar
- catalog_service: Read-only services, business settings and appointments
- notification_service: Best-effort post-booking WhatsApp message
"""

from scheduling.services.availability_service import (
    available_slots,
    build_month_calendar,
    business_today,
    get_available_slots,
    is_date_bookable,
)
from scheduling.services.catalog_service import (
    get_business_settings,
    list_active_services,
    list_appointments_from,
)
from scheduling.services.notification_service import (
    BookingNotification,
    notify_booking_created,
)

__all__ = [
    "available_slots",
    "build_month_calendar",
    "business_today",
    "get_available_slots",
    "is_date_bookable",
    "get_business_settings",
    "list_active_services",
    "list_appointments_from",
    "BookingNotification",
    "notify_booking_created",
]
