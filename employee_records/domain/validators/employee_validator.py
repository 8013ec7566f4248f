"""Validators for employee domain rules. Pure functions, no infrastructure or DB access."""

import re
from typing import Optional

from employee_records.domain.exceptions import DomainValidationError
from employee_records.domain.models.employee import Employee

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
SALARY_MIN = 0


def is_valid_email(email: Optional[str]) -> bool:
    """Empty values pass; presence is enforced by required-field checks."""
    if not email:
        return True
    return EMAIL_PATTERN.match(email) is not None


def validate_email(email: Optional[str]) -> None:
    if not is_valid_email(email):
        raise DomainValidationError(f"Invalid email format: {email}")


def validate_salary(salary: Optional[float]) -> None:
    if salary is not None and salary < SALARY_MIN:
        raise DomainValidationError("Salary must be a positive value")


def validate_employee(entity: Employee) -> None:
    """Validate Employee business rules before it reaches the storage layer."""
    for field_name in ("first_name", "last_name", "phone_number", "position", "email"):
        value = getattr(entity, field_name)
        if value is None or not str(value).strip():
            raise DomainValidationError(f"{field_name} is required")
    if entity.salary is None:
        raise DomainValidationError("salary is required")
    validate_email(entity.email)
    validate_salary(entity.salary)
