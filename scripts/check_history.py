# scripts/check_history.py
# Add and update one employee through the real audit pipeline, then print its history.

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from sqlalchemy import delete
from employee_records.api.dependencies import get_interceptor, get_history_store
from employee_records.domain.models.employee import Employee
from employee_records.infrastructure.database.employee_repository_db import DbEmployeeRepository
from employee_records.infrastructure.database.models import EmployeeRow
from employee_records.infrastructure.database.session import AsyncSessionLocal, engine, Base

CHECK_EMAIL = "history.check@example.com"


async def check_history():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        # Clear the previous run's employee so the unique email check passes
        await db.execute(delete(EmployeeRow).where(EmployeeRow.email == CHECK_EMAIL))
        await db.commit()

        repo = DbEmployeeRepository(db, get_interceptor())
        employee = await repo.add(
            Employee(
                first_name="History",
                last_name="Check",
                phone_number="000000000",
                position="Tester",
                email=CHECK_EMAIL,
                salary=1.0,
            )
        )
        employee.position = "Senior Tester"
        await repo.update(employee)

    for record in await get_history_store().list_for_entity(employee.id):
        print(record.timestamp.isoformat(), record.change_type.value, record.changes)

asyncio.run(check_history())
