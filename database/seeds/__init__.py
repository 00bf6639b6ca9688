"""
Seed data orchestration module.

Provides seed_all() function to execute all seed scripts in dependency order.
Can be run standalone: python -m database.seeds
"""

import asyncio

from database.init_db import init_database
from database.seeds.business_settings import seed_business_settings
from database.seeds.services import seed_services


async def seed_all() -> None:
    """
    Execute all seed scripts in dependency order.

    Order:
    1. schema (extensions + tables)
    2. business settings - independent
    3. services - independent
    """
    print("Starting database seeding...")
    print("-" * 50)

    await init_database()
    await seed_business_settings()
    await seed_services()

    print("-" * 50)
    print("Database seeding completed.")


if __name__ == "__main__":
    asyncio.run(seed_all())
