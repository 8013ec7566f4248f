"""Employee application service. Orchestrates validation, persistence and tenant-local views."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from employee_records.application.employee_repository import EmployeeRepository
from employee_records.application.exceptions import EmployeePersistenceError
from employee_records.application.history_store import HistoryStore
from employee_records.domain.exceptions import EmailAlreadyExistsError, EmployeeNotFoundError
from employee_records.domain.models.auditable import HistoryRecord
from employee_records.domain.models.employee import Employee
from employee_records.domain.schemas.employee import (
    EmployeeCreateRequest,
    EmployeeResponse,
    EmployeeUpdateRequest,
    HistoryResponse,
)
from employee_records.domain.validators.employee_validator import validate_employee
from employee_records.timezones.time_converter import TimeConverter

_UPDATABLE_FIELDS = (
    "first_name",
    "last_name",
    "phone_number",
    "position",
    "salary",
    "department",
    "hire_date",
)


def _request_to_employee(req: EmployeeCreateRequest) -> Employee:
    return Employee(
        first_name=req.first_name,
        last_name=req.last_name,
        phone_number=req.phone_number,
        position=req.position,
        department=req.department,
        email=req.email,
        salary=req.salary,
        hire_date=req.hire_date,
    )


def _apply_update(employee: Employee, req: EmployeeUpdateRequest) -> None:
    for name in _UPDATABLE_FIELDS:
        value = getattr(req, name)
        if value is not None:
            setattr(employee, name, value)


class EmployeeService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI.
    The country code is passed explicitly by the caller and only affects how
    timestamps are presented; storage is always in the server zone.
    HistoryPersistenceError from the audit pipeline is never caught here: a failed
    history append fails the add/update even though the employee row is stored.
    """

    def __init__(
        self,
        repository: EmployeeRepository,
        history_store: HistoryStore,
        converter: TimeConverter,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._history_store = history_store
        self._converter = converter
        self._logger = logger

    async def add_employee(
        self,
        request: EmployeeCreateRequest,
        country_code: Optional[str],
    ) -> EmployeeResponse:
        await self._ensure_email_unique(request.email)
        employee = _request_to_employee(request)
        validate_employee(employee)

        try:
            saved = await self._repository.add(employee)
        except SQLAlchemyError as e:
            self._logger.error("employee_add_failed", extra={"error": str(e)})
            raise EmployeePersistenceError("Failed to add employee due to database error") from e

        self._logger.info("employee_added", extra={"employee_id": str(saved.id)})
        return self._to_response(saved, country_code)

    async def update_employee(
        self,
        employee_id: UUID,
        request: EmployeeUpdateRequest,
        country_code: Optional[str],
    ) -> EmployeeResponse:
        try:
            existing = await self._repository.get(employee_id)
            if existing is None:
                self._logger.warning(
                    "employee_update_missing", extra={"employee_id": str(employee_id)}
                )
                raise EmployeeNotFoundError(f"Employee not found with ID: {employee_id}")

            _apply_update(existing, request)
            validate_employee(existing)
            updated = await self._repository.update(existing)
        except SQLAlchemyError as e:
            self._logger.error(
                "employee_update_failed",
                extra={"employee_id": str(employee_id), "error": str(e)},
            )
            raise EmployeePersistenceError(
                "Unable to update employee at this time, please try again later."
            ) from e

        self._logger.info("employee_updated", extra={"employee_id": str(updated.id)})
        return self._to_response(updated, country_code)

    async def get_employee(
        self,
        employee_id: UUID,
        country_code: Optional[str],
    ) -> Optional[EmployeeResponse]:
        try:
            employee = await self._repository.get(employee_id)
        except SQLAlchemyError as e:
            self._logger.error(
                "employee_fetch_failed",
                extra={"employee_id": str(employee_id), "error": str(e)},
            )
            raise EmployeePersistenceError("Unable to fetch employees at this time.") from e
        if employee is None:
            return None
        return self._to_response(employee, country_code)

    async def list_employees(
        self,
        page: int,
        size: int,
        country_code: Optional[str],
    ) -> List[EmployeeResponse]:
        try:
            employees = await self._repository.list_page(page, size)
        except SQLAlchemyError as e:
            self._logger.error("employee_list_failed", extra={"error": str(e)})
            raise EmployeePersistenceError("Unable to fetch employees at this time.") from e
        self._logger.info("employees_listed", extra={"page": page, "count": len(employees)})
        return [self._to_response(e, country_code) for e in employees]

    async def get_history(
        self,
        employee_id: UUID,
        country_code: Optional[str],
    ) -> List[HistoryResponse]:
        try:
            records = await self._history_store.list_for_entity(employee_id)
        except SQLAlchemyError as e:
            self._logger.error(
                "history_fetch_failed",
                extra={"employee_id": str(employee_id), "error": str(e)},
            )
            raise EmployeePersistenceError("Unable to fetch employee history at this time.") from e
        return [self._history_to_response(r, country_code) for r in records]

    async def _ensure_email_unique(self, email: str) -> None:
        try:
            existing = await self._repository.get_by_email(email)
        except SQLAlchemyError as e:
            raise EmployeePersistenceError("Failed to add employee due to database error") from e
        if existing is not None:
            self._logger.warning("employee_email_exists", extra={"employee_id": str(existing.id)})
            raise EmailAlreadyExistsError("Employee with this email already exists")

    def _to_response(self, employee: Employee, country_code: Optional[str]) -> EmployeeResponse:
        return EmployeeResponse(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            phone_number=employee.phone_number,
            position=employee.position,
            department=employee.department,
            email=employee.email,
            salary=employee.salary,
            hire_date=employee.hire_date,
            created_at=self._converter.to_local(employee.created_at, country_code),
            modified_at=self._converter.to_local(employee.modified_at, country_code),
        )

    def _history_to_response(
        self, record: HistoryRecord, country_code: Optional[str]
    ) -> HistoryResponse:
        return HistoryResponse(
            id=record.id,
            entity_id=record.entity_id,
            change_type=record.change_type,
            changes=record.changes,
            timestamp=self._converter.to_local(record.timestamp, country_code),
        )
