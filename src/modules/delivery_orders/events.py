"""Domain events for the delivery orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Type

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class DeliveryOrderCreated(DomainEvent):
    """Raised when a sender creates a delivery order."""

    sender_id: str = ""


@dataclass(frozen=True)
class DeliveryOrderStatusChanged(DomainEvent):
    """Raised when a sender or delivery agent changes an order's status."""

    old_status: str = ""
    new_status: str = ""
    actor_role: str = ""
    actor_id: str = ""


@dataclass(frozen=True)
class DeliveryAgentAssigned(DomainEvent):
    """Raised when a delivery agent is bound to an order."""

    delivery_agent_id: Any = None
    previous_delivery_agent_id: Optional[Any] = None
    old_status: str = ""


EVENT_TYPES: dict[str, Type[DomainEvent]] = {
    cls.__name__: cls
    for cls in (DeliveryOrderCreated, DeliveryOrderStatusChanged, DeliveryAgentAssigned)
}
