"""Domain-specific exceptions. Pure domain layer, no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when employee validation rules are violated."""


class EmployeeNotFoundError(DomainError):
    """Raised when an employee id does not match any stored employee."""


class EmailAlreadyExistsError(DomainError):
    """Raised when adding an employee whose email is already registered."""
