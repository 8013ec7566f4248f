"""Fixtures for API unit tests: EmployeeService over in-memory stores, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from employee_records.main import app


@pytest.fixture
def app_with_overrides(employee_service):
    """App with the employee service swapped for one over in-memory stores."""
    from employee_records.api import dependencies

    app.dependency_overrides[dependencies.get_employee_service] = lambda: employee_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def employee_body():
    return {
        "first_name": "John",
        "last_name": "Doe",
        "phone_number": "123456789",
        "position": "Developer",
        "department": "IT",
        "email": "john.doe@example.com",
        "salary": 5000,
    }
