"""Pydantic models for the booking API."""

from datetime import date, time
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ServiceResponse(BaseModel):
    """Bookable service as listed to customers."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    duration_minutes: int
    price: Decimal


class BusinessSettingsResponse(BaseModel):
    """Public view of the business settings (weekday 0=Sunday)."""
    model_config = ConfigDict(from_attributes=True)

    work_start: time
    work_end: time
    slot_interval_minutes: int
    weekday_off: list[int]
    specific_days_off: list[date]
    whatsapp_number: str | None = None


class AvailabilityResponse(BaseModel):
    """Bookable slot starts for one service on one day."""
    service_id: UUID
    date: date
    slots: list[str]  # "HH:MM"


class CalendarDayResponse(BaseModel):
    """One cell of the month calendar."""
    date: date
    in_month: bool
    blocked: bool
    past: bool
    selectable: bool
    is_today: bool


class MonthCalendarResponse(BaseModel):
    year: int
    month: int
    days: list[CalendarDayResponse]


class CreateAppointmentRequest(BaseModel):
    """
    Booking form submission.

    Fields are kept as raw strings so the booking validators can report
    exactly which field is wrong.
    """
    service_id: str
    appointment_date: str = Field(..., description="YYYY-MM-DD")
    appointment_time: str = Field(..., description="HH:MM")
    customer_name: str = ""
    customer_contact: str = Field("", description="Customer WhatsApp number")


class AppointmentResponse(BaseModel):
    """Committed appointment plus the optional follow-up WhatsApp link."""
    id: UUID
    service_id: UUID
    service_name: str
    customer_name: str
    customer_contact: str
    appointment_date: date
    appointment_time: str  # "HH:MM"
    duration_minutes: int
    status: str
    confirmation_message: str | None = None
    whatsapp_link: str | None = None


class ErrorResponse(BaseModel):
    error: str
    message: str
    field: str | None = None
