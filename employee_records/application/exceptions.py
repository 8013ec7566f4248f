"""Application-layer exceptions. Do not reuse domain exceptions."""

from typing import Optional
from uuid import UUID


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EmployeePersistenceError(ApplicationError):
    """Raised when the employee store fails to read or write."""


class ConcurrentModificationError(ApplicationError):
    """Raised when an update carries a stale version of the employee."""


class HistoryPersistenceError(ApplicationError):
    """
    Raised when a history record cannot be appended. The triggering employee write
    may already be committed; callers see the mutation as failed regardless.
    """

    def __init__(self, message: str, entity_id: Optional[UUID] = None) -> None:
        self.entity_id = entity_id
        super().__init__(message)
