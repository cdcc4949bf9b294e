"""Event bus contracts used by the service and task layers."""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    """Something that reacts to one kind of domain event."""

    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    """Routes published events to the handlers subscribed to their type."""

    def publish(self, event: DomainEvent) -> int: ...

    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...
