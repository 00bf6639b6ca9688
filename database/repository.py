"""
Scheduling repository - every query the engine runs against PostgreSQL.

Services and the booking transaction talk to storage only through
SchedulingRepository, so the pure scheduling rules never see a session and
tests can swap in a fake repository.

Usage:
    from database.repository import open_repository

    async with open_repository() as repo:
        settings = await repo.get_business_settings()
"""

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncGenerator, Optional
from uuid import UUID

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from database.connection import get_async_session
from database.models import (
    ACTIVE_STATUSES,
    SETTINGS_SINGLETON_ID,
    Appointment,
    BusinessSettings,
    Service,
)

logger = logging.getLogger(__name__)

# First key of the two-key advisory lock; the second key is the date ordinal
BOOKING_LOCK_NAMESPACE = 7305


class SchedulingRepository:
    """Thin data-access layer bound to one AsyncSession (one transaction)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_service(self, service_id: UUID) -> Optional[Service]:
        result = await self.session.execute(
            select(Service).where(Service.id == service_id)
        )
        return result.scalar_one_or_none()

    async def list_active_services(self) -> list[Service]:
        result = await self.session.execute(
            select(Service)
            .where(Service.is_active.is_(True))
            .order_by(Service.price, Service.name)
        )
        return list(result.scalars().all())

    async def get_business_settings(self) -> Optional[BusinessSettings]:
        result = await self.session.execute(
            select(BusinessSettings).where(BusinessSettings.id == SETTINGS_SINGLETON_ID)
        )
        return result.scalar_one_or_none()

    async def list_appointments_from(self, start_date: date) -> list[Appointment]:
        """All appointments (any status) on or after start_date, chronological."""
        result = await self.session.execute(
            select(Appointment)
            .where(Appointment.appointment_date >= start_date)
            .order_by(Appointment.appointment_date, Appointment.appointment_time)
        )
        return list(result.scalars().all())

    async def list_active_appointments_on(self, target_date: date) -> list[Appointment]:
        """Pending and confirmed appointments holding a slot on target_date."""
        result = await self.session.execute(
            select(Appointment)
            .where(Appointment.appointment_date == target_date)
            .where(Appointment.status.in_(ACTIVE_STATUSES))
            .order_by(Appointment.appointment_time)
        )
        return list(result.scalars().all())

    async def lock_date(self, target_date: date) -> None:
        """
        Enter the per-date critical section.

        Takes a transaction-scoped advisory lock keyed by the date, so
        concurrent bookings for the same day queue up here while other days
        proceed untouched. Released automatically on commit or rollback.
        """
        await self.session.execute(
            text("SELECT pg_advisory_xact_lock(:namespace, :day_key)").bindparams(
                namespace=BOOKING_LOCK_NAMESPACE,
                day_key=target_date.toordinal(),
            )
        )
        logger.debug(f"Advisory lock acquired for {target_date.isoformat()}")

    async def add_appointment(self, appointment: Appointment) -> Appointment:
        self.session.add(appointment)
        await self.session.flush()
        return appointment

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


@asynccontextmanager
async def open_repository() -> AsyncGenerator[SchedulingRepository, None]:
    """Open a session and yield a repository bound to it."""
    async with get_async_session() as session:
        yield SchedulingRepository(session)
