"""Domain validators. Pure functions."""

from employee_records.domain.validators.employee_validator import (
    is_valid_email,
    validate_email,
    validate_employee,
    validate_salary,
)

__all__ = [
    "is_valid_email",
    "validate_email",
    "validate_employee",
    "validate_salary",
]
