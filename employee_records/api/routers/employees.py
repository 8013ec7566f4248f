"""Employees API router: add, update, fetch, list, history. Timestamps are rendered in the caller's zone."""

from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from employee_records.api.dependencies import get_country_code, get_employee_service
from employee_records.application.employee_service import EmployeeService
from employee_records.domain.schemas.employee import (
    ApiResponse,
    EmployeeCreateRequest,
    EmployeeResponse,
    EmployeeUpdateRequest,
    HistoryResponse,
)

router = APIRouter()


@router.post("", response_model=ApiResponse[EmployeeResponse])
async def add_employee(
    body: EmployeeCreateRequest,
    country_code: Annotated[str, Depends(get_country_code)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
):
    """Add a new employee. Fails if the email is taken or the history write fails."""
    employee = await employee_service.add_employee(body, country_code)
    return ApiResponse[EmployeeResponse](
        status=200, message="Employee added successfully", data=employee
    )


@router.put("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
async def update_employee(
    employee_id: UUID,
    body: EmployeeUpdateRequest,
    country_code: Annotated[str, Depends(get_country_code)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
):
    """Apply the non-null fields of the body to an existing employee."""
    employee = await employee_service.update_employee(employee_id, body, country_code)
    return ApiResponse[EmployeeResponse](
        status=200, message="Employee updated successfully", data=employee
    )


@router.get("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
async def get_employee(
    employee_id: UUID,
    country_code: Annotated[str, Depends(get_country_code)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
):
    employee = await employee_service.get_employee(employee_id, country_code)
    if employee is None:
        return JSONResponse(
            status_code=404,
            content={"status": 404, "message": "Employee not found", "data": None},
        )
    return ApiResponse[EmployeeResponse](
        status=200, message="Employee fetched successfully", data=employee
    )


@router.get("", response_model=ApiResponse[List[EmployeeResponse]])
async def list_employees(
    country_code: Annotated[str, Depends(get_country_code)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int, Query(ge=1, le=100)] = 10,
):
    employees = await employee_service.list_employees(page, size, country_code)
    return ApiResponse[List[EmployeeResponse]](
        status=200, message="Employees fetched successfully", data=employees
    )


@router.get("/{employee_id}/history", response_model=ApiResponse[List[HistoryResponse]])
async def get_employee_history(
    employee_id: UUID,
    country_code: Annotated[str, Depends(get_country_code)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
):
    """History records for one employee, oldest first."""
    records = await employee_service.get_history(employee_id, country_code)
    return ApiResponse[List[HistoryResponse]](
        status=200, message="Employee history fetched successfully", data=records
    )
