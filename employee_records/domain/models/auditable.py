"""Audit capability shared by tracked entities, and the audit value types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable
from uuid import UUID


class ChangeType(str, Enum):
    """Kind of mutation a history record describes."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"


@runtime_checkable
class AuditableEntity(Protocol):
    """
    Any entity that carries audit timestamps and can render a history snapshot.
    Timestamps are naive wall-clock values in the canonical server zone.
    """

    id: Optional[UUID]
    created_at: Optional[datetime]
    modified_at: Optional[datetime]

    def render_snapshot(self) -> str:
        """Deterministic, locale-independent rendering of the business fields."""
        ...


@dataclass(frozen=True)
class ChangeEvent:
    """In-process notification that a tracked entity was written. Never persisted."""

    entity: Any
    change_type: ChangeType


@dataclass(frozen=True)
class HistoryRecord:
    """Immutable, append-only audit entry for one observed mutation."""

    id: UUID
    entity_id: UUID
    change_type: ChangeType
    changes: str
    timestamp: datetime
