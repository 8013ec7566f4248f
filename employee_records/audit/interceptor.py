"""Lifecycle hooks the storage layer calls around every employee write."""

from datetime import datetime
from typing import Callable

from employee_records.audit.event_bus import ChangeEventBus
from employee_records.domain.models.auditable import AuditableEntity, ChangeEvent, ChangeType
from employee_records.timezones.time_converter import TimeConverter


class EntityLifecycleInterceptor:
    """
    Stamps audit timestamps before a write and announces the write afterwards.

    Hook order per write: on_before_create/on_before_update -> write ->
    on_after_write -> ChangeEventBus.publish -> history append. The timestamp
    hooks mutate the entity in place, so the persisted row carries the stamped
    values. on_after_write raises whatever a subscriber raises.

    Post-create events are tagged UPDATED unless tag_creates is set; history
    consumers have always seen creates and updates under the same tag.
    """

    def __init__(
        self,
        converter: TimeConverter,
        bus: ChangeEventBus,
        clock: Callable[[], datetime] = datetime.now,
        tag_creates: bool = False,
    ) -> None:
        self._converter = converter
        self._bus = bus
        self._clock = clock
        self._tag_creates = tag_creates

    def on_before_create(self, entity: AuditableEntity) -> None:
        entity.created_at = self._converter.now_server(self._clock)
        entity.modified_at = entity.created_at

    def on_before_update(self, entity: AuditableEntity) -> None:
        now = self._converter.now_server(self._clock)
        # modified_at never moves backwards, even if the host clock does.
        if entity.modified_at is not None and now < entity.modified_at:
            now = entity.modified_at
        entity.modified_at = now

    async def on_after_write(self, entity: AuditableEntity, *, created: bool = False) -> None:
        change_type = ChangeType.CREATED if created and self._tag_creates else ChangeType.UPDATED
        await self._bus.publish(ChangeEvent(entity=entity, change_type=change_type))
