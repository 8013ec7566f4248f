"""Pydantic schemas for the employee API. Strict validation, no DB or infrastructure."""

from datetime import date, datetime
from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from employee_records.domain.models.auditable import ChangeType
from employee_records.domain.validators.employee_validator import is_valid_email

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class EmployeeCreateRequest(BaseModel):
    """Request schema for adding an employee."""

    first_name: str = Field(..., description="first name is required")
    last_name: str = Field(..., description="last name is required")
    phone_number: str = Field(..., description="phone number is required")
    position: str = Field(..., description="Position is required")
    department: Optional[str] = None
    email: str = Field(..., description="Email is required")
    salary: float = Field(..., ge=0.0, description="Salary must be a positive value")
    hire_date: Optional[date] = None

    @field_validator("email")
    @classmethod
    def email_must_be_well_formed(cls, v: str) -> str:
        if not is_valid_email(v):
            raise ValueError("Invalid email format")
        return v


class EmployeeUpdateRequest(BaseModel):
    """Partial update; only non-null fields are applied. Email cannot be changed."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0.0)
    hire_date: Optional[date] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class EmployeeResponse(BaseModel):
    """Employee as seen by a tenant; timestamps are in the tenant's zone."""

    id: UUID
    first_name: str
    last_name: str
    phone_number: str
    position: str
    department: Optional[str] = None
    email: str
    salary: float
    hire_date: Optional[date] = None
    created_at: datetime
    modified_at: datetime


class HistoryResponse(BaseModel):
    id: UUID
    entity_id: UUID
    change_type: ChangeType
    changes: str
    timestamp: datetime


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every successful employee endpoint."""

    status: int
    message: str
    data: Optional[T] = None
