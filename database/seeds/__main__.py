"""Entry point for: python -m database.seeds"""

import asyncio

from database.seeds import seed_all

asyncio.run(seed_all())
