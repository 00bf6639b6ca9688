"""
Catalog Service - read-only access to services, settings and appointments.

These are the externally administered records the engine consumes. Every
storage failure surfaces as DataUnavailableError: an empty list here would
look like "no services" or "fully free calendar" to the caller, so there is
no silent fallback.
"""

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError

from database.models import Appointment, BusinessSettings, Service
from database.repository import open_repository
from scheduling.exceptions import DataUnavailableError

logger = logging.getLogger(__name__)


async def list_active_services() -> list[Service]:
    """
    Active services, cheapest first (ties broken by name).

    Raises:
        DataUnavailableError: If the database cannot be queried
    """
    try:
        async with open_repository() as repo:
            services = await repo.list_active_services()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Error listing active services: {e}", exc_info=True)
        raise DataUnavailableError("Could not load the service catalog") from e

    logger.debug(f"Loaded {len(services)} active services")
    return services


async def get_business_settings() -> BusinessSettings:
    """
    The singleton business settings row.

    Raises:
        DataUnavailableError: If the database fails or the row was never created
    """
    try:
        async with open_repository() as repo:
            settings = await repo.get_business_settings()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Error loading business settings: {e}", exc_info=True)
        raise DataUnavailableError("Could not load business settings") from e

    if settings is None:
        logger.error("Business settings row is missing")
        raise DataUnavailableError("Business settings are not configured")

    return settings


async def list_appointments_from(start_date: date) -> list[Appointment]:
    """
    Appointments dated on or after start_date, any status.

    Cancelled rows are included; the occupancy filter ignores them.

    Raises:
        DataUnavailableError: If the database cannot be queried
    """
    try:
        async with open_repository() as repo:
            appointments = await repo.list_appointments_from(start_date)
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            f"Error listing appointments from {start_date}: {e}",
            extra={"appointment_date": start_date.isoformat()},
            exc_info=True,
        )
        raise DataUnavailableError("Could not load appointments") from e

    return appointments
