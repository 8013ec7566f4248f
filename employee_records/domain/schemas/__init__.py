"""Pydantic schemas for the employee API."""

from employee_records.domain.schemas.employee import (
    ApiResponse,
    EmployeeCreateRequest,
    EmployeeResponse,
    EmployeeUpdateRequest,
    HistoryResponse,
)

__all__ = [
    "ApiResponse",
    "EmployeeCreateRequest",
    "EmployeeResponse",
    "EmployeeUpdateRequest",
    "HistoryResponse",
]
