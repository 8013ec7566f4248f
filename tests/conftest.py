"""Shared fixtures: fixed clocks, timezone table, in-memory stores, wired audit pipeline."""

import dataclasses
import time
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from employee_records.application.employee_service import EmployeeService
from employee_records.application.exceptions import ConcurrentModificationError
from employee_records.audit.event_bus import ChangeEventBus
from employee_records.audit.interceptor import EntityLifecycleInterceptor
from employee_records.audit.recorder import HistoryRecorder
from employee_records.domain.exceptions import EmployeeNotFoundError
from employee_records.domain.models.employee import Employee
from employee_records.domain.schemas.employee import EmployeeCreateRequest
from employee_records.timezones.time_converter import TimeConverter
from employee_records.timezones.timezone_resolver import TimezoneResolver, TimezoneTable

START = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class SteppingClock:
    """Aware UTC clock that advances by `step` on every call."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(seconds=1)):
        self._current = start
        self._step = step

    def __call__(self) -> datetime:
        value = self._current
        self._current += self._step
        return value


class InMemoryHistoryStore:
    """Append-only list; set `fail` to simulate a storage outage."""

    def __init__(self):
        self.records = []
        self.fail = False
        self.append_calls = 0

    async def append(self, record):
        self.append_calls += 1
        if self.fail:
            raise RuntimeError("History DB down")
        self.records.append(record)

    async def list_for_entity(self, entity_id):
        return [r for r in self.records if r.entity_id == entity_id]


class InMemoryEmployeeRepository:
    """
    Storage layer fake with the same hook sequence as DbEmployeeRepository:
    before-hook, committed write, then on_after_write.
    """

    def __init__(self, interceptor: EntityLifecycleInterceptor):
        self._interceptor = interceptor
        self.rows: dict = {}

    async def add(self, employee):
        self._interceptor.on_before_create(employee)
        employee.id = uuid.uuid4()
        employee.version = 1
        self.rows[employee.id] = dataclasses.replace(employee)
        await self._interceptor.on_after_write(employee, created=True)
        return employee

    async def update(self, employee):
        stored = self.rows.get(employee.id)
        if stored is None:
            raise EmployeeNotFoundError(f"Employee not found with ID: {employee.id}")
        if employee.version != stored.version:
            raise ConcurrentModificationError(f"Employee {employee.id} was modified concurrently")
        self._interceptor.on_before_update(employee)
        employee.version = stored.version + 1
        self.rows[employee.id] = dataclasses.replace(employee)
        await self._interceptor.on_after_write(employee)
        return employee

    async def get(self, employee_id):
        stored = self.rows.get(employee_id)
        return dataclasses.replace(stored) if stored else None

    async def get_by_email(self, email):
        for stored in self.rows.values():
            if stored.email == email:
                return dataclasses.replace(stored)
        return None

    async def list_page(self, page, size):
        ordered = sorted(self.rows.values(), key=lambda e: (e.created_at, str(e.id)))
        return [dataclasses.replace(e) for e in ordered[page * size:(page + 1) * size]]


def make_employee(**overrides) -> Employee:
    fields = dict(
        first_name="John",
        last_name="Doe",
        phone_number="123456789",
        position="Developer",
        department="IT",
        email="john.doe@example.com",
        salary=5000.0,
    )
    fields.update(overrides)
    return Employee(**fields)


def make_create_request(**overrides) -> EmployeeCreateRequest:
    fields = dict(
        first_name="John",
        last_name="Doe",
        phone_number="123456789",
        position="Developer",
        department="IT",
        email="john.doe@example.com",
        salary=5000.0,
    )
    fields.update(overrides)
    return EmployeeCreateRequest(**fields)


@pytest.fixture
def timezone_table():
    return TimezoneTable(
        server_zone="UTC",
        zones={
            "NG": "Africa/Lagos",
            "IN": "Asia/Kolkata",
            "US": "America/New_York",
            "UK": "Europe/London",
        },
    )


@pytest.fixture
def resolver(timezone_table):
    return TimezoneResolver(timezone_table)


@pytest.fixture
def converter(resolver):
    return TimeConverter(resolver)


@pytest.fixture
def clock():
    return SteppingClock()


@pytest.fixture
def history_store():
    return InMemoryHistoryStore()


@pytest.fixture
def event_bus():
    return ChangeEventBus()


@pytest.fixture
def recorder(history_store, converter, clock):
    return HistoryRecorder(store=history_store, converter=converter, clock=clock)


@pytest.fixture
def interceptor(converter, event_bus, recorder, clock):
    event_bus.subscribe(recorder.on_change_event)
    return EntityLifecycleInterceptor(converter=converter, bus=event_bus, clock=clock)


@pytest.fixture
def employee_repository(interceptor):
    return InMemoryEmployeeRepository(interceptor)


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def employee_service(employee_repository, history_store, converter, logger):
    return EmployeeService(
        repository=employee_repository,
        history_store=history_store,
        converter=converter,
        logger=logger,
    )


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def create_request_factory():
    return make_create_request


@pytest.fixture
def employee_repository_factory():
    return InMemoryEmployeeRepository


@pytest.fixture
def kolkata_host(monkeypatch):
    """Run the test with the process default zone set to Asia/Kolkata (UTC+05:30)."""
    if not hasattr(time, "tzset"):
        pytest.skip("process timezone cannot be switched on this platform")
    monkeypatch.setenv("TZ", "Asia/Kolkata")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
