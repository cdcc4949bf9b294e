"""In-process event bus used to fan outbox events out to handlers."""

from __future__ import annotations

from typing import Dict, List, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    """Synchronous bus: ``publish`` returns once every handler has run.

    Handler exceptions propagate to the publisher so the caller can decide
    whether the event counts as delivered.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, event: DomainEvent) -> int:
        """Dispatch *event* and return how many handlers received it."""
        handlers = self._handlers.get(type(event), [])
        for handler in handlers:
            handler.handle(event)
        logger.debug(
            "event_bus.published",
            event_name=event.event_name,
            handler_count=len(handlers),
        )
        return len(handlers)


event_bus = InMemoryEventBus()
