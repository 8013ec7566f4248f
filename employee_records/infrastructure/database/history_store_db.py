"""DB-backed history store. Each append runs in its own session and transaction."""

from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from employee_records.domain.models.auditable import ChangeType, HistoryRecord
from employee_records.infrastructure.database.models import EmployeeHistoryRow


def _to_record(row: EmployeeHistoryRow) -> HistoryRecord:
    return HistoryRecord(
        id=row.id,
        entity_id=row.employee_id,
        change_type=ChangeType(row.change_type),
        changes=row.changes,
        timestamp=row.timestamp,
    )


class DbHistoryStore:
    """
    Persists history records to the employee_history table. Implements HistoryStore protocol.
    Never reuses the caller's session: the append commits or rolls back on its own.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def append(self, record: HistoryRecord) -> None:
        """Insert the record and commit. Raises SQLAlchemyError on failure; nothing is kept."""
        async with self._session_factory() as session:
            async with session.begin():
                session.add(
                    EmployeeHistoryRow(
                        id=record.id,
                        employee_id=record.entity_id,
                        change_type=record.change_type.value,
                        changes=record.changes,
                        timestamp=record.timestamp,
                    )
                )

    async def list_for_entity(self, entity_id: UUID) -> List[HistoryRecord]:
        async with self._session_factory() as session:
            stmt = (
                select(EmployeeHistoryRow)
                .where(EmployeeHistoryRow.employee_id == entity_id)
                .order_by(EmployeeHistoryRow.timestamp, EmployeeHistoryRow.id)
            )
            result = await session.execute(stmt)
            return [_to_record(row) for row in result.scalars().all()]
