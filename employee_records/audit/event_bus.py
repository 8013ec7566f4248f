"""In-process change event bus.

Delivers each ChangeEvent to every subscriber, one at a time, in the order the
subscribers were registered. publish() returns only after the last subscriber
has finished. There is no buffering, persistence or retry: an event published
with no subscribers is dropped, and a subscriber failure stops delivery and is
raised to the publisher.
"""

import logging
from typing import Awaitable, Callable, List

from employee_records.domain.models.auditable import ChangeEvent

ChangeHandler = Callable[[ChangeEvent], Awaitable[None]]

logger = logging.getLogger(__name__)


class ChangeEventBus:
    def __init__(self) -> None:
        self._handlers: List[ChangeHandler] = []

    def subscribe(self, handler: ChangeHandler) -> None:
        """Register a handler for the lifetime of the process."""
        self._handlers.append(handler)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    async def publish(self, event: ChangeEvent) -> None:
        if not self._handlers:
            logger.debug(
                "change_event_dropped",
                extra={"change_type": event.change_type.value},
            )
            return

        for handler in list(self._handlers):
            await handler(event)
