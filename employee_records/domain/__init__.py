"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from employee_records.domain.exceptions import (
    DomainError,
    DomainValidationError,
    EmailAlreadyExistsError,
    EmployeeNotFoundError,
)
from employee_records.domain.models import (
    AuditableEntity,
    ChangeEvent,
    ChangeType,
    Employee,
    HistoryRecord,
)

__all__ = [
    "AuditableEntity",
    "ChangeEvent",
    "ChangeType",
    "DomainError",
    "DomainValidationError",
    "EmailAlreadyExistsError",
    "Employee",
    "EmployeeNotFoundError",
    "HistoryRecord",
]
