# scripts/create_tables.py
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from employee_records.infrastructure.database.session import engine, Base
from employee_records.infrastructure.database import models  # noqa: F401  registers tables


async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Tables ready:", ", ".join(sorted(Base.metadata.tables)))


asyncio.run(create_tables())
