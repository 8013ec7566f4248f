"""Audit pipeline: lifecycle interceptor, change event bus, history recorder. No FastAPI."""

from employee_records.audit.event_bus import ChangeEventBus
from employee_records.audit.interceptor import EntityLifecycleInterceptor
from employee_records.audit.recorder import HistoryRecorder

__all__ = [
    "ChangeEventBus",
    "EntityLifecycleInterceptor",
    "HistoryRecorder",
]
