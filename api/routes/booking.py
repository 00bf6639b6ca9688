"""
Booking API Endpoints

Provides REST endpoints for the customer booking flow:
- GET /api/services - Active services, cheapest first
- GET /api/settings - Business working window and days off
- GET /api/availability - Bookable slots for a service on a date
- GET /api/calendar/{year}/{month} - Month grid with closed/past days
- POST /api/appointments - Commit a booking

Scheduling errors are mapped to HTTP status codes in api/main.py.
"""

import logging
from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from api.models.booking import (
    AppointmentResponse,
    AvailabilityResponse,
    BusinessSettingsResponse,
    CalendarDayResponse,
    CreateAppointmentRequest,
    ErrorResponse,
    MonthCalendarResponse,
    ServiceResponse,
)
from scheduling.services.availability_service import (
    build_month_calendar,
    business_today,
    get_available_slots,
)
from scheduling.services.catalog_service import (
    get_business_settings,
    list_active_services,
)
from scheduling.services.notification_service import notify_booking_created
from scheduling.transactions.booking_transaction import BookingTransaction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["booking"])

UNAVAILABLE = {503: {"model": ErrorResponse, "description": "Database unavailable"}}


@router.get("/services", response_model=list[ServiceResponse], responses=UNAVAILABLE)
async def get_services() -> list[ServiceResponse]:
    """List active services ordered by price."""
    services = await list_active_services()
    return [ServiceResponse.model_validate(s) for s in services]


@router.get("/settings", response_model=BusinessSettingsResponse, responses=UNAVAILABLE)
async def get_settings_view() -> BusinessSettingsResponse:
    """Return the business settings singleton."""
    settings = await get_business_settings()
    return BusinessSettingsResponse.model_validate(settings)


@router.get(
    "/availability",
    response_model=AvailabilityResponse,
    responses={422: {"model": ErrorResponse}, **UNAVAILABLE},
)
async def get_availability(
    service_id: Annotated[UUID, Query(description="Service to book")],
    target_date: Annotated[date, Query(alias="date", description="YYYY-MM-DD")],
) -> AvailabilityResponse:
    """
    Bookable slots for a service on a date.

    The list is advisory: the booking endpoint re-checks it at commit time.
    """
    slots = await get_available_slots(service_id, target_date)
    return AvailabilityResponse(
        service_id=service_id,
        date=target_date,
        slots=[f"{slot:%H:%M}" for slot in slots],
    )


@router.get("/calendar/{year}/{month}", response_model=MonthCalendarResponse)
async def get_month_calendar(year: int, month: int) -> MonthCalendarResponse:
    """Sunday-first month grid, each day flagged as blocked, past or selectable."""
    if not 1 <= month <= 12 or not 1 <= year <= 9998:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid month {year}-{month}",
        )

    settings = await get_business_settings()
    days = build_month_calendar(date(year, month, 1), settings, business_today())
    return MonthCalendarResponse(
        year=year,
        month=month,
        days=[CalendarDayResponse(**day) for day in days],
    )


@router.post(
    "/appointments",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Slot taken meanwhile"},
        422: {"model": ErrorResponse, "description": "Invalid field"},
        **UNAVAILABLE,
    },
)
async def create_appointment(payload: CreateAppointmentRequest) -> AppointmentResponse:
    """
    Commit a booking.

    **Errors:**
    - **422**: A field is missing or invalid (`field` names it)
    - **409**: The slot was taken meanwhile; reload availability
    - **503**: Database unavailable; nothing was written
    """
    appointment = await BookingTransaction.execute(
        service_id=payload.service_id,
        appointment_date=payload.appointment_date,
        appointment_time=payload.appointment_time,
        customer_name=payload.customer_name,
        customer_contact=payload.customer_contact,
    )

    service_name = appointment.service.name

    # Best-effort: the booking is already committed
    whatsapp_number = None
    try:
        whatsapp_number = (await get_business_settings()).whatsapp_number
    except Exception as e:
        logger.warning(
            f"Could not load WhatsApp number for notification: {e}",
            extra={"appointment_id": appointment.id},
        )

    notification = notify_booking_created(
        customer_name=appointment.customer_name,
        service_name=service_name,
        appointment_date=appointment.appointment_date,
        appointment_time=appointment.appointment_time,
        whatsapp_number=whatsapp_number,
    )

    return AppointmentResponse(
        id=appointment.id,
        service_id=appointment.service_id,
        service_name=service_name,
        customer_name=appointment.customer_name,
        customer_contact=appointment.customer_contact,
        appointment_date=appointment.appointment_date,
        appointment_time=f"{appointment.appointment_time:%H:%M}",
        duration_minutes=appointment.duration_minutes,
        status=appointment.status.value,
        confirmation_message=notification.message if notification else None,
        whatsapp_link=notification.whatsapp_link if notification else None,
    )
