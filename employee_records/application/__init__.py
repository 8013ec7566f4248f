# Application layer: services that orchestrate domain and infrastructure.

from employee_records.application.employee_repository import EmployeeRepository
from employee_records.application.employee_service import EmployeeService
from employee_records.application.exceptions import (
    ApplicationError,
    ConcurrentModificationError,
    EmployeePersistenceError,
    HistoryPersistenceError,
)
from employee_records.application.history_store import HistoryStore

__all__ = [
    "EmployeeService",
    "ApplicationError",
    "ConcurrentModificationError",
    "EmployeePersistenceError",
    "HistoryPersistenceError",
    "EmployeeRepository",
    "HistoryStore",
]
