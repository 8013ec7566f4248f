"""FastAPI dependency injection: timezone services, audit pipeline, EmployeeService, country code."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from employee_records.application.employee_service import EmployeeService
from employee_records.audit.event_bus import ChangeEventBus
from employee_records.audit.interceptor import EntityLifecycleInterceptor
from employee_records.audit.recorder import HistoryRecorder
from employee_records.config.settings import get_settings
from employee_records.infrastructure.database.employee_repository_db import DbEmployeeRepository
from employee_records.infrastructure.database.history_store_db import DbHistoryStore
from employee_records.infrastructure.database.session import AsyncSessionLocal, get_db
from employee_records.timezones.locale_resolver import LocaleResolver
from employee_records.timezones.time_converter import TimeConverter
from employee_records.timezones.timezone_resolver import TimezoneResolver, TimezoneTable

_time_converter: TimeConverter | None = None
_locale_resolver: LocaleResolver | None = None
_history_store: DbHistoryStore | None = None
_interceptor: EntityLifecycleInterceptor | None = None


def get_time_converter() -> TimeConverter:
    """Return singleton TimeConverter over the startup timezone table."""
    global _time_converter
    if _time_converter is None:
        table = TimezoneTable.from_settings(get_settings())
        _time_converter = TimeConverter(TimezoneResolver(table))
    return _time_converter


def get_locale_resolver() -> LocaleResolver:
    """Return singleton LocaleResolver."""
    global _locale_resolver
    if _locale_resolver is None:
        _locale_resolver = LocaleResolver.from_settings(get_settings())
    return _locale_resolver


def get_history_store() -> DbHistoryStore:
    """Return singleton history store; it opens its own sessions per append."""
    global _history_store
    if _history_store is None:
        _history_store = DbHistoryStore(AsyncSessionLocal)
    return _history_store


def build_interceptor(
    history_store,
    converter: TimeConverter,
) -> EntityLifecycleInterceptor:
    """Wire interceptor -> bus -> recorder -> store. The recorder is the bus's only subscriber."""
    settings = get_settings()
    bus = ChangeEventBus()
    recorder = HistoryRecorder(
        store=history_store,
        converter=converter,
        append_attempts=settings.history_append_attempts,
    )
    bus.subscribe(recorder.on_change_event)
    return EntityLifecycleInterceptor(
        converter=converter,
        bus=bus,
        tag_creates=settings.history_tag_creates,
    )


def get_interceptor() -> EntityLifecycleInterceptor:
    """Return singleton lifecycle interceptor, wiring the audit pipeline on first use."""
    global _interceptor
    if _interceptor is None:
        _interceptor = build_interceptor(get_history_store(), get_time_converter())
    return _interceptor


async def get_employee_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmployeeService:
    """Build EmployeeService over the request session with the shared audit pipeline."""
    repository = DbEmployeeRepository(session=db, interceptor=get_interceptor())
    return EmployeeService(
        repository=repository,
        history_store=get_history_store(),
        converter=get_time_converter(),
        logger=logging.getLogger("employee_records.application.employee_service"),
    )


def get_country_code(request: Request) -> str:
    """Extract country_code from request.state (set by middleware)."""
    return request.state.country_code
