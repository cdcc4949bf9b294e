"""Delivery agent assignment.

Assigning an agent is not a table-driven transition: whatever the order's
current status, the agent is bound (or re-bound) and the status is forced
to ``Accepted``.  Repeating the call with another agent reassigns the
order and leaves the status at ``Accepted``.

The order lookup here includes soft-deleted orders by default, unlike the
status-update paths.  ``include_deleted=False`` makes the two consistent;
while the default stands, every assignment to a deleted order is logged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import transaction

from modules.delivery_orders.constants import ASSIGNED_STATUS, ActorRole
from modules.delivery_orders.events import DeliveryAgentAssigned
from modules.delivery_orders.exceptions import DeliveryAgentNotFound, OrderNotFound

if TYPE_CHECKING:
    from modules.accounts.repositories.interfaces import IDeliveryAgentRepository
    from modules.delivery_orders.models import DeliveryOrder
    from modules.delivery_orders.repositories.interfaces import (
        IDeliveryOrderRepository,
    )

logger = structlog.get_logger(__name__)


class AssignmentManager:
    """Binds delivery agents to orders."""

    def __init__(
        self,
        order_repository: IDeliveryOrderRepository,
        delivery_agent_repository: IDeliveryAgentRepository,
        include_deleted: bool = True,
    ) -> None:
        self._order_repo = order_repository
        self._agent_repo = delivery_agent_repository
        self._include_deleted = include_deleted

    @transaction.atomic
    def assign(self, order_id: Any, delivery_agent_id: Any) -> DeliveryOrder:
        """Bind *delivery_agent_id* to *order_id* and force ``Accepted``.

        Raises:
            DeliveryAgentNotFound: the agent id does not resolve.
            OrderNotFound: the order id does not resolve.
        """
        order = self._order_repo.get_for_update(
            order_id, include_deleted=self._include_deleted
        )
        agent = self._agent_repo.get_by_id(delivery_agent_id)
        if agent is None:
            raise DeliveryAgentNotFound(f"DeliveryAgent[{delivery_agent_id}] not found!")
        if order is None:
            raise OrderNotFound("Delivery order not found.")

        log = logger.bind(order_id=order.id, delivery_agent_id=agent.id)
        if order.is_deleted:
            log.warning("delivery_order.assigned_while_deleted")

        old_status = order.status
        previous_agent_id = order.delivery_agent_id

        order.delivery_agent = agent
        order.status = ASSIGNED_STATUS
        order.add_domain_event(
            DeliveryAgentAssigned(
                aggregate_id=order.id,
                delivery_agent_id=agent.id,
                previous_delivery_agent_id=previous_agent_id,
                old_status=old_status,
            )
        )
        self._order_repo.save(order)

        self._order_repo.add_history(
            order_id=order.id,
            new_status=ASSIGNED_STATUS,
            actor_role=ActorRole.DELIVERY_AGENT,
            actor_id=agent.id,
            old_status=old_status,
            notes=_assignment_note(previous_agent_id, agent.id),
        )

        log.info(
            "delivery_order.agent_assigned",
            old_status=old_status,
            previous_delivery_agent_id=previous_agent_id,
        )
        return order


def _assignment_note(previous_agent_id: Any, agent_id: Any) -> str:
    if previous_agent_id is None:
        return f"Assigned to delivery agent {agent_id}"
    if previous_agent_id == agent_id:
        return f"Re-assigned to delivery agent {agent_id}"
    return f"Reassigned from delivery agent {previous_agent_id} to {agent_id}"
