"""Employee repository protocol. Application layer depends on this; infrastructure implements it."""

from typing import List, Optional, Protocol
from uuid import UUID

from employee_records.domain.models.employee import Employee


class EmployeeRepository(Protocol):
    """
    Storage layer for employees. Implementations must call the lifecycle interceptor:
    on_before_create / on_before_update before field values are written, and
    on_after_write once the write is applied.
    """

    async def add(self, employee: Employee) -> Employee:
        """Persist a new employee; id, timestamps and version are set in place."""
        ...

    async def update(self, employee: Employee) -> Employee:
        """Persist changes to an existing employee. Raises ConcurrentModificationError on a stale version."""
        ...

    async def get(self, employee_id: UUID) -> Optional[Employee]:
        ...

    async def get_by_email(self, email: str) -> Optional[Employee]:
        ...

    async def list_page(self, page: int, size: int) -> List[Employee]:
        ...
