"""Event handlers for delivery order domain events.

These are the audit sink: each handler writes one structured log line.
"""

from __future__ import annotations

import structlog

from modules.delivery_orders.events import (
    DeliveryAgentAssigned,
    DeliveryOrderCreated,
    DeliveryOrderStatusChanged,
)
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class DeliveryOrderCreatedHandler(IEventHandler[DeliveryOrderCreated]):
    def handle(self, event: DeliveryOrderCreated) -> None:
        logger.info(
            f"DeliveryOrder created with ID: {event.aggregate_id}",
            order_id=event.aggregate_id,
            sender_id=event.sender_id,
        )


class DeliveryOrderStatusChangedHandler(IEventHandler[DeliveryOrderStatusChanged]):
    def handle(self, event: DeliveryOrderStatusChanged) -> None:
        logger.info(
            f"DeliveryOrder[{event.aggregate_id}] {event.old_status}->{event.new_status}",
            order_id=event.aggregate_id,
            actor_role=event.actor_role,
            actor_id=event.actor_id,
        )


class DeliveryAgentAssignedHandler(IEventHandler[DeliveryAgentAssigned]):
    def handle(self, event: DeliveryAgentAssigned) -> None:
        logger.info(
            f"DeliveryOrder[{event.aggregate_id}] assigned to "
            f"DeliveryAgent[{event.delivery_agent_id}]",
            order_id=event.aggregate_id,
            delivery_agent_id=event.delivery_agent_id,
            previous_delivery_agent_id=event.previous_delivery_agent_id,
        )


delivery_order_created_handler = DeliveryOrderCreatedHandler()
delivery_order_status_changed_handler = DeliveryOrderStatusChangedHandler()
delivery_agent_assigned_handler = DeliveryAgentAssignedHandler()
