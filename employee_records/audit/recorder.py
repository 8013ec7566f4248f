"""Turns change events into durable history records. No FastAPI."""

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from employee_records.application.exceptions import HistoryPersistenceError
from employee_records.application.history_store import HistoryStore
from employee_records.domain.models.auditable import ChangeEvent, HistoryRecord
from employee_records.domain.models.employee import Employee
from employee_records.timezones.time_converter import TimeConverter


class HistoryRecorder:
    """
    Subscribes to the ChangeEventBus and appends one HistoryRecord per event.

    The store commits each append on its own, independent of the transaction that
    produced the event. Append failures are retried up to append_attempts times in
    total; the last failure is raised as HistoryPersistenceError back through the
    bus to the writer.
    """

    def __init__(
        self,
        store: HistoryStore,
        converter: TimeConverter,
        clock: Callable[[], datetime] = datetime.now,
        append_attempts: int = 1,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._converter = converter
        self._clock = clock
        self._append_attempts = max(1, append_attempts)
        self._logger = logger or logging.getLogger(__name__)

    async def on_change_event(self, event: ChangeEvent) -> None:
        entity = event.entity
        if isinstance(entity, Employee):
            record = self._employee_record(entity, event)
        else:
            self._logger.warning(
                "history_unsupported_entity",
                extra={"entity_type": type(entity).__name__},
            )
            return

        await self._append(record)

    def _employee_record(self, employee: Employee, event: ChangeEvent) -> HistoryRecord:
        return HistoryRecord(
            id=uuid.uuid4(),
            entity_id=employee.id,
            change_type=event.change_type,
            changes=employee.render_snapshot(),
            timestamp=self._converter.now_server(self._clock),
        )

    async def _append(self, record: HistoryRecord) -> None:
        self._logger.info(
            "history_recording",
            extra={"entity_id": str(record.entity_id), "change_type": record.change_type.value},
        )
        for attempt in range(1, self._append_attempts + 1):
            try:
                await self._store.append(record)
            except Exception as e:
                self._logger.error(
                    "history_append_failed",
                    extra={
                        "entity_id": str(record.entity_id),
                        "attempt": attempt,
                        "max_attempts": self._append_attempts,
                        "error": str(e),
                    },
                )
                if attempt == self._append_attempts:
                    raise HistoryPersistenceError(
                        f"History append failed for entity {record.entity_id}: {e}",
                        entity_id=record.entity_id,
                    ) from e
            else:
                self._logger.info(
                    "history_recorded",
                    extra={"entity_id": str(record.entity_id), "history_id": str(record.id)},
                )
                return
