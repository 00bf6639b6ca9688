"""
Seed data script for services table.

Default catalog of a small beauty studio. Prices in BRL.
Can be run standalone: python -m database.seeds.services
"""

import asyncio
from decimal import Decimal

from sqlalchemy import delete

from database.connection import get_async_session
from database.models import Appointment, Service

SERVICES = [
    {
        "name": "Corte Masculino",
        "description": "Corte na tesoura ou máquina, com lavagem",
        "duration_minutes": 30,
        "price": Decimal("45.00"),
    },
    {
        "name": "Barba",
        "description": "Barba com toalha quente e navalha",
        "duration_minutes": 30,
        "price": Decimal("35.00"),
    },
    {
        "name": "Corte Feminino",
        "description": "Corte, lavagem e finalização",
        "duration_minutes": 60,
        "price": Decimal("90.00"),
    },
    {
        "name": "Escova",
        "description": "Lavagem e escova modelada",
        "duration_minutes": 45,
        "price": Decimal("60.00"),
    },
    {
        "name": "Coloração",
        "description": "Coloração completa com produtos profissionais",
        "duration_minutes": 90,
        "price": Decimal("180.00"),
    },
    {
        "name": "Manicure e Pedicure",
        "description": "Cutilagem e esmaltação de mãos e pés",
        "duration_minutes": 60,
        "price": Decimal("70.00"),
    },
]


async def seed_services() -> None:
    """
    Seed services table with the default catalog.

    DESTRUCTIVE: Deletes existing services and their appointments, then
    inserts the catalog.
    """
    async with get_async_session() as session:
        await session.execute(delete(Appointment))
        result = await session.execute(delete(Service))
        deleted_count = result.rowcount

        for service_data in SERVICES:
            session.add(Service(**service_data))

        await session.commit()

        print("✓ Services seed completed:")
        print(f"  - Deleted: {deleted_count} old services")
        print(f"  - Created: {len(SERVICES)} new services")


if __name__ == "__main__":
    asyncio.run(seed_services())
