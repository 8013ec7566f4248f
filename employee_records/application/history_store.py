"""History store protocol. The durable append-only log of history records."""

from typing import List, Protocol
from uuid import UUID

from employee_records.domain.models.auditable import HistoryRecord


class HistoryStore(Protocol):
    """Protocol for appending immutable history records."""

    async def append(self, record: HistoryRecord) -> None:
        """
        Durably append one record in a unit of work of its own. Raises on failure;
        a record is never partially written.
        """
        ...

    async def list_for_entity(self, entity_id: UUID) -> List[HistoryRecord]:
        """Return all records for an entity, oldest first."""
        ...
