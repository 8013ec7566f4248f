"""DB-backed employee repository. Drives the lifecycle interceptor around every write."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from employee_records.application.exceptions import ConcurrentModificationError
from employee_records.audit.interceptor import EntityLifecycleInterceptor
from employee_records.domain.exceptions import EmployeeNotFoundError
from employee_records.domain.models.employee import Employee
from employee_records.infrastructure.database.models import EmployeeRow

_BUSINESS_FIELDS = (
    "first_name",
    "last_name",
    "phone_number",
    "position",
    "department",
    "email",
    "hire_date",
    "salary",
)


def _copy_to_row(employee: Employee, row: EmployeeRow) -> None:
    for name in _BUSINESS_FIELDS:
        setattr(row, name, getattr(employee, name))
    row.created_at = employee.created_at
    row.modified_at = employee.modified_at


def _to_domain(row: EmployeeRow) -> Employee:
    return Employee(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        phone_number=row.phone_number,
        position=row.position,
        department=row.department,
        email=row.email,
        hire_date=row.hire_date,
        salary=row.salary,
        created_at=row.created_at,
        modified_at=row.modified_at,
        version=row.version,
    )


class DbEmployeeRepository:
    """
    Persists employees to PostgreSQL. Implements EmployeeRepository protocol.

    Write sequence: interceptor before-hook -> copy to row -> flush -> commit ->
    interceptor on_after_write. The employee row is committed before history is
    recorded, so a history failure leaves the row in place while the call fails.
    """

    def __init__(self, session: AsyncSession, interceptor: EntityLifecycleInterceptor) -> None:
        self._session = session
        self._interceptor = interceptor

    async def add(self, employee: Employee) -> Employee:
        self._interceptor.on_before_create(employee)
        row = EmployeeRow()
        _copy_to_row(employee, row)
        self._session.add(row)
        try:
            await self._session.flush()
            employee.id = row.id
            employee.version = row.version
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            raise

        await self._interceptor.on_after_write(employee, created=True)
        return employee

    async def update(self, employee: Employee) -> Employee:
        row = await self._session.get(EmployeeRow, employee.id)
        if row is None:
            raise EmployeeNotFoundError(f"Employee not found with ID: {employee.id}")
        if employee.version is not None and row.version != employee.version:
            raise ConcurrentModificationError(
                f"Employee {employee.id} was modified concurrently "
                f"(expected version {employee.version}, found {row.version})"
            )

        self._interceptor.on_before_update(employee)
        _copy_to_row(employee, row)
        try:
            await self._session.flush()
            employee.version = row.version
            await self._session.commit()
        except StaleDataError as e:
            await self._session.rollback()
            raise ConcurrentModificationError(
                f"Employee {employee.id} was modified concurrently"
            ) from e
        except SQLAlchemyError:
            await self._session.rollback()
            raise

        await self._interceptor.on_after_write(employee)
        return employee

    async def get(self, employee_id: UUID) -> Optional[Employee]:
        row = await self._session.get(EmployeeRow, employee_id)
        if row is None:
            return None
        return _to_domain(row)

    async def get_by_email(self, email: str) -> Optional[Employee]:
        stmt = select(EmployeeRow).where(EmployeeRow.email == email)
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return _to_domain(row)

    async def list_page(self, page: int, size: int) -> List[Employee]:
        stmt = (
            select(EmployeeRow)
            .order_by(EmployeeRow.created_at, EmployeeRow.id)
            .offset(page * size)
            .limit(size)
        )
        result = await self._session.execute(stmt)
        return [_to_domain(row) for row in result.scalars().all()]
