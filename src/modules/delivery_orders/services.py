"""Delivery order service layer (use cases).

Orchestrates order creation, the role-scoped status updates and agent
assignment.  Every command is atomic: it reads, validates, mutates,
persists and returns inside one transaction, so a rejected operation
leaves no partial write behind.

Actor identity is always an explicit argument; nothing here reads the
request or any other ambient state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.delivery_orders.assignment import AssignmentManager
from modules.delivery_orders.constants import INITIAL_STATUS, ActorRole
from modules.delivery_orders.events import (
    DeliveryOrderCreated,
    DeliveryOrderStatusChanged,
)
from modules.delivery_orders.exceptions import (
    DeliveryAgentNotFound,
    InvalidStatusTransition,
    OrderAccessDenied,
    OrderNotFound,
    OrderValidationFailed,
    SenderNotFound,
)
from modules.delivery_orders.models import DeliveryOrder
from modules.delivery_orders.receivers import ReceiverResolver
from modules.delivery_orders.transitions import coerce_status
from modules.delivery_orders.validation import validate_delivery_order

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.repositories.interfaces import (
        IAccountRepository,
        IDeliveryAgentRepository,
    )
    from modules.delivery_orders.dtos import CreateDeliveryOrderDTO
    from modules.delivery_orders.repositories.interfaces import (
        IDeliveryOrderRepository,
    )

logger = structlog.get_logger(__name__)


class DeliveryOrderService:
    """Application service for delivery order use cases.

    Repositories are injected through the constructor.
    ``enforce_validation`` rejects incomplete orders at creation time;
    when ``False`` the failure is only logged.  ``assign_includes_deleted``
    lets assignment reach soft-deleted orders.
    """

    def __init__(
        self,
        order_repository: IDeliveryOrderRepository,
        account_repository: IAccountRepository,
        delivery_agent_repository: IDeliveryAgentRepository,
        enforce_validation: bool = True,
        assign_includes_deleted: bool = True,
    ) -> None:
        self._order_repo = order_repository
        self._account_repo = account_repository
        self._agent_repo = delivery_agent_repository
        self._enforce_validation = enforce_validation
        self._receivers = ReceiverResolver(account_repository)
        self._assignments = AssignmentManager(
            order_repository,
            delivery_agent_repository,
            include_deleted=assign_includes_deleted,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(
        self, actor_user_id: Any, dto: CreateDeliveryOrderDTO
    ) -> DeliveryOrder:
        """Create a delivery order on behalf of *actor_user_id*.

        Steps:
        1. Resolve the acting user's account (the sender).
        2. Snapshot the sender's contact details.
        3. Resolve the receiver (registered account or guest).
        4. Validate, persist with status ``Created`` and record history.

        Raises:
            SenderNotFound: the actor has no registered account.
            OrderValidationFailed: the order is incomplete and validation
                is enforced.
        """
        log = logger.bind(actor_user_id=str(actor_user_id))

        sender = self._account_repo.get_by_user_id(actor_user_id)
        if sender is None:
            raise SenderNotFound(f"Account for user {actor_user_id} not found!")

        receiver = self._receivers.resolve(
            dto.receiver_account_id,
            fallback_name=dto.receiver_info.name,
            fallback_phone_number=dto.receiver_info.phone_number,
        )

        order = DeliveryOrder(
            sender=sender,
            sender_name=sender.name,
            sender_phone_number=sender.phone_number,
            receiver_account=receiver.account,
            status=INITIAL_STATUS,
        )
        order.receiver_info = receiver.receiver_info
        order.start_coordinates = (
            dto.start_coordinates.to_value() if dto.start_coordinates else None
        )
        order.end_coordinates = (
            dto.end_coordinates.to_value() if dto.end_coordinates else None
        )
        order.item_info = dto.item_info.to_value()
        order.delivery_info = (
            dto.delivery_info.to_value() if dto.delivery_info else None
        )

        is_valid, message = validate_delivery_order(order)
        if not is_valid:
            if self._enforce_validation:
                log.warning("delivery_order.validation_failed", reason=message)
                raise OrderValidationFailed(message)
            log.warning("delivery_order.validation_skipped", reason=message)

        # First save assigns the id the creation event refers to.
        self._order_repo.save(order)
        order.add_domain_event(
            DeliveryOrderCreated(aggregate_id=order.id, sender_id=str(sender.id))
        )
        self._order_repo.save(order)

        self._order_repo.add_history(
            order_id=order.id,
            new_status=INITIAL_STATUS,
            actor_role=ActorRole.SENDER,
            actor_id=sender.id,
            notes="Delivery order created",
        )

        log.info(
            "delivery_order.created",
            order_id=order.id,
            sender_id=str(sender.id),
            receiver_is_guest=receiver.is_guest,
        )
        return order

    @transaction.atomic
    def update_status_by_agent(
        self,
        delivery_agent_id: Any,
        order_id: Any,
        new_status: str,
        notes: str = "",
    ) -> DeliveryOrder:
        """Move an order along the delivery agent's transition table.

        Raises:
            UnknownOrderStatus: *new_status* is not a recognised state.
            DeliveryAgentNotFound: the agent id does not resolve.
            OrderNotFound: the order does not exist or is deleted.
            InvalidStatusTransition: the agent table rejects the change.
        """
        target = coerce_status(new_status)
        agent = self._agent_repo.get_by_id(delivery_agent_id)
        if agent is None:
            raise DeliveryAgentNotFound(f"DeliveryAgent[{delivery_agent_id}] not found!")

        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound("Delivery order not found.")

        return self._apply_status(
            order, target, ActorRole.DELIVERY_AGENT, agent.id, notes
        )

    @transaction.atomic
    def update_status_by_sender(
        self,
        order_id: Any,
        new_status: str,
        sender_id: Any,
        notes: str = "",
    ) -> DeliveryOrder:
        """Move an order along the sender's transition table.

        Only the order's own sender may do this.

        Raises:
            UnknownOrderStatus: *new_status* is not a recognised state.
            OrderNotFound: the order does not exist or is deleted.
            OrderAccessDenied: *sender_id* is not the order's sender.
            InvalidStatusTransition: the sender table rejects the change.
        """
        target = coerce_status(new_status)
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound("Delivery order not found.")

        if str(order.sender_id) != str(sender_id):
            logger.warning(
                "delivery_order.sender_mismatch",
                order_id=order.id,
                sender_id=str(sender_id),
            )
            raise OrderAccessDenied("Delivery order not found.")

        return self._apply_status(order, target, ActorRole.SENDER, sender_id, notes)

    def assign_delivery_agent(
        self, order_id: Any, delivery_agent_id: Any
    ) -> DeliveryOrder:
        """Bind an agent to an order and force ``Accepted``.

        Raises:
            DeliveryAgentNotFound: the agent id does not resolve.
            OrderNotFound: the order id does not resolve.
        """
        return self._assignments.assign(order_id, delivery_agent_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: Any) -> DeliveryOrder:
        """Retrieve a single non-deleted order.

        Raises:
            OrderNotFound: if the order does not exist or is deleted.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound("Delivery order not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        """Return non-deleted orders, optionally filtered."""
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_status(
        self,
        order: DeliveryOrder,
        new_status: str,
        role: ActorRole,
        actor_id: Any,
        notes: str,
    ) -> DeliveryOrder:
        log = logger.bind(
            order_id=order.id,
            actor_role=str(role),
            current_status=order.status,
            new_status=str(new_status),
        )

        if not order.can_transition_to(new_status, role):
            log.warning("delivery_order.invalid_transition")
            raise InvalidStatusTransition(str(order.status), str(new_status))

        old_status = order.status
        order.status = new_status
        order.add_domain_event(
            DeliveryOrderStatusChanged(
                aggregate_id=order.id,
                old_status=str(old_status),
                new_status=str(new_status),
                actor_role=str(role),
                actor_id=str(actor_id),
            )
        )
        self._order_repo.save(order)

        self._order_repo.add_history(
            order_id=order.id,
            new_status=new_status,
            actor_role=role,
            actor_id=actor_id,
            old_status=old_status,
            notes=notes,
        )

        log.info("delivery_order.status_updated")
        return order
