"""Domain models. Pure business entities."""

from employee_records.domain.models.auditable import (
    AuditableEntity,
    ChangeEvent,
    ChangeType,
    HistoryRecord,
)
from employee_records.domain.models.employee import Employee

__all__ = [
    "AuditableEntity",
    "ChangeEvent",
    "ChangeType",
    "Employee",
    "HistoryRecord",
]
