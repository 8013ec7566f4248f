"""Conversion between the canonical server zone and tenant zones."""

from datetime import datetime
from typing import Callable, Optional

from employee_records.timezones.timezone_resolver import TimezoneResolver

Clock = Callable[[], datetime]


class TimeConverter:
    """
    Timestamps are written relative to the host's default zone and read relative
    to the requesting tenant's zone:

    - to_local: server-zone wall clock -> aware datetime in the tenant zone.
    - to_server: host-default-zone wall clock -> naive server-zone wall clock.

    Both directions preserve the instant, so to_server(to_local(t, code)) == t.
    """

    def __init__(self, resolver: TimezoneResolver) -> None:
        self._resolver = resolver

    def to_local(self, server_timestamp: datetime, country_code: Optional[str]) -> datetime:
        if server_timestamp.tzinfo is None:
            server_timestamp = server_timestamp.replace(tzinfo=self._resolver.server_zone)
        return server_timestamp.astimezone(self._resolver.zone(country_code))

    def to_server(self, local_timestamp: datetime) -> datetime:
        # astimezone() reads a naive value in the process's current default zone.
        return local_timestamp.astimezone(self._resolver.server_zone).replace(tzinfo=None)

    def now_server(self, clock: Clock = datetime.now) -> datetime:
        return self.to_server(clock())
