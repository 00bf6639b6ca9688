"""
Seed script for the business_settings singleton.

Default schedule:
- Monday to Saturday: 09:00 - 18:00, a slot every 30 minutes
- Sunday: CLOSED (weekday 0)
- Christmas and New Year's Day closed
"""

import asyncio
from datetime import date, time
from typing import Any

from sqlalchemy import select

from database.connection import AsyncSessionLocal
from database.models import SETTINGS_SINGLETON_ID, BusinessSettings

BUSINESS_SETTINGS_DATA: dict[str, Any] = {
    "work_start": time(9, 0),
    "work_end": time(18, 0),
    "slot_interval_minutes": 30,
    "weekday_off": [0],  # 0=Sunday
    "specific_days_off": [
        date(2026, 12, 25),
        date(2027, 1, 1),
    ],
    "whatsapp_number": "11987654321",
}


async def seed_business_settings() -> None:
    """
    Create or update the singleton settings row.

    Uses UPSERT logic: an existing row is overwritten with the defaults.
    """
    async with AsyncSessionLocal() as session:
        async with session.begin():
            result = await session.execute(
                select(BusinessSettings).where(BusinessSettings.id == SETTINGS_SINGLETON_ID)
            )
            existing = result.scalar_one_or_none()

            if existing is None:
                session.add(BusinessSettings(id=SETTINGS_SINGLETON_ID, **BUSINESS_SETTINGS_DATA))
                print("✓ Created business settings")
            else:
                for key, value in BUSINESS_SETTINGS_DATA.items():
                    setattr(existing, key, value)
                print("⊙ Updated business settings")

    data = BUSINESS_SETTINGS_DATA
    print(
        f"  - Window: {data['work_start']:%H:%M} to {data['work_end']:%H:%M}, "
        f"every {data['slot_interval_minutes']} min"
    )
    print(f"  - Weekly days off: {data['weekday_off']}")
    print(f"  - Specific days off: {len(data['specific_days_off'])}")


if __name__ == "__main__":
    asyncio.run(seed_business_settings())
