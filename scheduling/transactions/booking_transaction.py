"""
Booking Transaction Handler.

This module implements the only write path of the scheduling engine:
- Request validation (required fields, date/time format, active service)
- Calendar validation (day not blocked, not in the past, time is a real slot)
- Occupancy re-check against live data inside a per-date critical section
- Insert of the PENDING appointment in the same transaction

Slot lists shown to customers are advisory; the decision is re-derived here.
Two layers keep the calendar free of overlaps:
1. pg_advisory_xact_lock keyed by the date serialises bookings for that day,
   so check-then-insert is atomic with respect to other bookings of the day
2. The excl_appointments_no_overlap exclusion constraint rejects any overlap
   that gets past layer 1; its violation is reported as SlotConflictError

The BookingTransaction.execute() method is the single entry point for creating appointments.
"""

import logging
from datetime import date, time
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database.models import NO_OVERLAP_CONSTRAINT, Appointment, AppointmentStatus
from database.repository import open_repository
from scheduling.exceptions import (
    BookingValidationError,
    DataUnavailableError,
    SlotConflictError,
)
from scheduling.occupancy import filter_available
from scheduling.services.availability_service import business_today, is_date_bookable
from scheduling.slots import generate_slots
from scheduling.validators.booking_validators import validate_booking_request

logger = logging.getLogger(__name__)


class BookingTransaction:
    """
    Atomic transaction handler for creating appointments.

    This class encapsulates the complete booking flow:
    1. Validate the request structure
    2. Load the service and business settings, validate date and slot
    3. Lock the date, re-read its active appointments, reject overlaps
    4. Insert the appointment (PENDING) and commit

    Any exception rolls the transaction back; nothing is partially written.
    """

    @staticmethod
    async def execute(
        service_id: UUID | str,
        appointment_date: date | str,
        appointment_time: time | str,
        customer_name: str,
        customer_contact: str,
    ) -> Appointment:
        """
        Execute atomic booking transaction.

        Args:
            service_id: Service UUID
            appointment_date: Requested day (date or "YYYY-MM-DD")
            appointment_time: Requested slot start (time or "HH:MM")
            customer_name: Customer full name
            customer_contact: Customer WhatsApp / phone

        Returns:
            The committed Appointment (status PENDING) with its service loaded.

        Raises:
            BookingValidationError: Malformed input, inactive service, blocked
                or past date, or a time that is not a slot start
            SlotConflictError: The slot overlaps an appointment committed first
            DataUnavailableError: Database or settings unavailable

        Example:
            >>> appointment = await BookingTransaction.execute(
            ...     service_id="7d0c...",
            ...     appointment_date="2026-10-20",
            ...     appointment_time="10:00",
            ...     customer_name="Ana Souza",
            ...     customer_contact="(11) 98765-4321",
            ... )
            >>> appointment.status
            <AppointmentStatus.PENDING: 'pending'>
        """
        request = validate_booking_request(
            service_id, appointment_date, appointment_time, customer_name, customer_contact
        )
        target_date = request.appointment_date
        slot = request.appointment_time

        trace_id = f"{target_date.isoformat()}_{slot:%H%M}"
        log_extra = {
            "service_id": request.service_id,
            "appointment_date": target_date.isoformat(),
            "appointment_time": f"{slot:%H:%M}",
        }
        logger.info(f"[{trace_id}] Starting booking transaction", extra=log_extra)

        today = business_today()

        try:
            async with open_repository() as repo:
                # Step 1: Service and settings
                service = await repo.get_service(request.service_id)
                if service is None or not service.is_active:
                    logger.warning(f"[{trace_id}] Service not found or inactive", extra=log_extra)
                    raise BookingValidationError("service_id", "Service not found or inactive")

                settings = await repo.get_business_settings()
                if settings is None:
                    logger.error(f"[{trace_id}] Business settings row is missing")
                    raise DataUnavailableError("Business settings are not configured")

                # Step 2: Calendar rules
                if not is_date_bookable(target_date, settings, today):
                    logger.warning(f"[{trace_id}] Date is blocked or in the past", extra=log_extra)
                    raise BookingValidationError("appointment_date", "This date is not available for booking")

                candidates = generate_slots(
                    settings.work_start,
                    settings.work_end,
                    settings.slot_interval_minutes,
                    service.duration_minutes,
                )
                if slot not in candidates:
                    logger.warning(f"[{trace_id}] Time is not a slot start", extra=log_extra)
                    raise BookingValidationError("appointment_time", "This time is not a valid slot")

                # Step 3: Per-date critical section, re-check live occupancy
                await repo.lock_date(target_date)
                booked = await repo.list_active_appointments_on(target_date)

                if not filter_available([slot], target_date, booked, service.duration_minutes):
                    logger.warning(
                        f"[{trace_id}] Slot taken by a concurrent booking",
                        extra=log_extra,
                    )
                    raise SlotConflictError(target_date, slot)

                # Step 4: Insert PENDING appointment and commit
                appointment = Appointment(
                    service=service,
                    customer_name=request.customer_name,
                    customer_contact=request.customer_contact,
                    appointment_date=target_date,
                    appointment_time=slot,
                    duration_minutes=service.duration_minutes,
                    slot_range=Appointment.build_slot_range(slot, service.duration_minutes),
                    status=AppointmentStatus.PENDING,
                )
                await repo.add_appointment(appointment)
                await repo.commit()

        except IntegrityError as e:
            if NO_OVERLAP_CONSTRAINT in str(e.orig):
                logger.warning(
                    f"[{trace_id}] Exclusion constraint rejected overlapping booking",
                    extra=log_extra,
                )
                raise SlotConflictError(target_date, slot) from e
            logger.error(
                f"[{trace_id}] Database integrity error",
                extra={**log_extra, "error": str(e)},
                exc_info=True,
            )
            raise DataUnavailableError("Storage rejected the booking") from e

        except (SQLAlchemyError, OSError) as e:
            logger.error(
                f"[{trace_id}] Database error",
                extra={**log_extra, "error": str(e)},
                exc_info=True,
            )
            raise DataUnavailableError("Could not complete the booking") from e

        logger.info(
            f"[{trace_id}] Appointment committed (PENDING)",
            extra={**log_extra, "appointment_id": appointment.id},
        )
        return appointment
