"""Country code to timezone resolution with a server-zone fallback."""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping, Optional
from zoneinfo import ZoneInfo

from employee_records.config.settings import AppSettings


@lru_cache(maxsize=None)
def load_zone(zone_id: str) -> ZoneInfo:
    return ZoneInfo(zone_id)


@dataclass(frozen=True)
class TimezoneTable:
    """
    Static country -> zone mapping plus the canonical server zone.
    Loaded once at startup and read-only afterwards.
    """

    server_zone: str = "UTC"
    zones: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "TimezoneTable":
        return cls(
            server_zone=settings.server_timezone,
            zones={code.upper(): zone_id for code, zone_id in settings.timezones.items()},
        )


class TimezoneResolver:
    """Resolve a tenant country code to a zone id. Never fails: unknown codes get the server zone."""

    def __init__(self, table: TimezoneTable) -> None:
        self._table = table

    @property
    def server_zone(self) -> ZoneInfo:
        return load_zone(self._table.server_zone)

    def resolve(self, country_code: Optional[str]) -> str:
        if not country_code:
            return self._table.server_zone
        return self._table.zones.get(country_code.strip().upper(), self._table.server_zone)

    def zone(self, country_code: Optional[str]) -> ZoneInfo:
        return load_zone(self.resolve(country_code))
