"""Delivery order repository interface (the Order Store).

Extends ``IRepository[DeliveryOrder]`` with the look-ups the lifecycle
operations need: visibility of soft-deleted rows is an explicit argument,
and mutation paths load the row with a lock.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db import models

    from modules.delivery_orders.models import (
        DeliveryOrder,
        DeliveryOrderStatusHistory,
    )


class IDeliveryOrderRepository(IRepository["DeliveryOrder"]):
    """Repository contract for the DeliveryOrder aggregate."""

    @abstractmethod
    def get_by_id(
        self, id: Any, include_deleted: bool = False
    ) -> Optional[DeliveryOrder]:
        """Retrieve an order; soft-deleted orders are hidden unless asked for."""

    @abstractmethod
    def get_for_update(
        self, id: Any, include_deleted: bool = False
    ) -> Optional[DeliveryOrder]:
        """Retrieve an order with a row-level lock for a mutation."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        """List non-deleted orders with optional filters."""

    @abstractmethod
    def add_history(
        self,
        order_id: Any,
        new_status: str,
        actor_role: str,
        actor_id: Any = "",
        old_status: Optional[str] = None,
        notes: str = "",
    ) -> DeliveryOrderStatusHistory:
        """Append a record to the order's status audit trail."""
