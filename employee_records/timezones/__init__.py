"""Tenant timezone and locale resolution. No FastAPI."""

from employee_records.timezones.locale_resolver import LocaleResolver
from employee_records.timezones.time_converter import TimeConverter
from employee_records.timezones.timezone_resolver import TimezoneResolver, TimezoneTable

__all__ = [
    "LocaleResolver",
    "TimeConverter",
    "TimezoneResolver",
    "TimezoneTable",
]
