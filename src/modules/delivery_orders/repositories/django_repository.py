"""Django ORM implementation of the delivery order repository.

``save`` persists the aggregate and, in the same transaction, writes every
pending domain event to the outbox.  Mutation paths use
``select_for_update()`` so concurrent writers serialize on the order row.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.core.models import OutboxEvent
from modules.delivery_orders.constants import OUTBOX_TOPIC
from modules.delivery_orders.models import DeliveryOrder, DeliveryOrderStatusHistory
from modules.delivery_orders.repositories.interfaces import IDeliveryOrderRepository

logger = structlog.get_logger(__name__)

_RELATIONS = ("sender", "receiver_account", "delivery_agent__account")


class DeliveryOrderDjangoRepository(IDeliveryOrderRepository):
    """Concrete DeliveryOrder repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _base_queryset(self, include_deleted: bool) -> models.QuerySet:
        manager = DeliveryOrder.objects
        queryset = manager.all() if include_deleted else manager.alive()
        return queryset.select_related(*_RELATIONS)

    def get_by_id(
        self, id: Any, include_deleted: bool = False
    ) -> Optional[DeliveryOrder]:
        """Return the order, or ``None`` for missing, hidden or malformed IDs."""
        if id in (None, ""):
            return None
        try:
            return (
                self._base_queryset(include_deleted)
                .prefetch_related("status_history")
                .filter(id=id)
                .first()
            )
        except (ValueError, TypeError, ValidationError):
            return None

    def get_for_update(
        self, id: Any, include_deleted: bool = False
    ) -> Optional[DeliveryOrder]:
        """Return the order locked with ``SELECT ... FOR UPDATE``.

        Must be called inside a transaction (the services are atomic).
        """
        if id in (None, ""):
            return None
        try:
            return (
                self._base_queryset(include_deleted)
                .select_for_update(of=("self",))
                .filter(id=id)
                .first()
            )
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        """List non-deleted orders.

        Examples of valid filters::

            {"sender_id": account.id}
            {"status": "InProgress", "delivery_agent_id": 7}
        """
        queryset = self._base_queryset(include_deleted=False)
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: DeliveryOrder) -> DeliveryOrder:
        """Persist (insert or update) an order and flush its domain events."""
        is_new = entity._state.adding
        entity.save()

        events = entity.domain_events
        for event in events:
            OutboxEvent.objects.create(
                event_type=event.event_name,
                aggregate_id=str(event.aggregate_id),
                payload=_serialize_event_payload(event),
                topic=OUTBOX_TOPIC,
            )
        entity.clear_domain_events()

        logger.info(
            "delivery_order.saved",
            order_id=entity.id,
            is_new=is_new,
            event_count=len(events),
        )
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        """Soft-delete an order by ID."""
        order = self.get_by_id(id)
        if not order:
            return False
        order.delete()
        logger.info("delivery_order.soft_deleted", order_id=id)
        return True

    @transaction.atomic
    def add_history(
        self,
        order_id: Any,
        new_status: str,
        actor_role: str,
        actor_id: Any = "",
        old_status: Optional[str] = None,
        notes: str = "",
    ) -> DeliveryOrderStatusHistory:
        history = DeliveryOrderStatusHistory.objects.create(
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            actor_role=actor_role,
            actor_id="" if actor_id is None else str(actor_id),
            notes=notes,
        )
        logger.info(
            "delivery_order.history_added",
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            actor_role=actor_role,
        )
        return history


def _serialize_event_payload(event: Any) -> Dict[str, Any]:
    data = asdict(event)
    normalized = _normalize_for_json(data)
    return json.loads(json.dumps(normalized))


def _normalize_for_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, list):
        return [_normalize_for_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize_for_json(val) for key, val in value.items()}
    return value
