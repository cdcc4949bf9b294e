"""DeliveryOrder and DeliveryOrderStatusHistory models.

Rules implemented here:
- The sender FK is mandatory and uses PROTECT: an order never loses its
  sender.  ``sender_name`` / ``sender_phone_number`` snapshot the account
  at creation time.
- Value objects (route, item, delivery figures, receiver) are stored as
  plain columns and exposed as immutable objects through properties; the
  setters replace all of an object's columns at once.
- ``receiver_normalized_phone_number`` is re-derived from
  ``receiver_phone_number`` on every save and has no setter of its own.
- Status changes are validated by the service layer against the role
  tables (``can_transition_to``); the model only stores the result.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel, SoftDeleteModel
from modules.delivery_orders.constants import (
    INITIAL_STATUS,
    ActorRole,
    DeliveryOrderStatus,
)
from modules.delivery_orders.transitions import is_valid_transition
from modules.delivery_orders.value_objects import (
    Coordinates,
    DeliveryInfo,
    ItemInfo,
    ReceiverInfo,
)
from shared.domain.events import DomainEventMixin
from shared.domain.phone import normalize_phone_number


class DeliveryOrder(DomainEventMixin, SoftDeleteModel):
    """Delivery order aggregate root (numeric ``id``)."""

    # Parties ------------------------------------------------------------
    sender = models.ForeignKey(
        "accounts.Account",
        on_delete=models.PROTECT,
        related_name="sent_delivery_orders",
    )
    sender_name = models.CharField(max_length=255, blank=True, default="")
    sender_phone_number = models.CharField(max_length=32, blank=True, default="")
    receiver_account = models.ForeignKey(
        "accounts.Account",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="received_delivery_orders",
    )
    receiver_name = models.CharField(max_length=255, blank=True, default="")
    receiver_phone_number = models.CharField(max_length=32, blank=True, default="")
    receiver_normalized_phone_number = models.CharField(
        max_length=32, blank=True, default="", editable=False
    )
    delivery_agent = models.ForeignKey(
        "accounts.DeliveryAgent",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="delivery_orders",
    )

    # Route ----------------------------------------------------------------
    start_latitude = models.FloatField(null=True, blank=True)
    start_longitude = models.FloatField(null=True, blank=True)
    start_address = models.CharField(max_length=255, blank=True, default="")
    end_latitude = models.FloatField(null=True, blank=True)
    end_longitude = models.FloatField(null=True, blank=True)
    end_address = models.CharField(max_length=255, blank=True, default="")

    # Item -----------------------------------------------------------------
    item_length = models.FloatField(default=0.0)
    item_width = models.FloatField(default=0.0)
    item_height = models.FloatField(default=0.0)
    item_weight = models.FloatField(default=0.0)
    item_quantity = models.PositiveIntegerField(
        default=1, validators=[MinValueValidator(1)]
    )
    item_remark = models.TextField(blank=True, default="")

    # Delivery figures -----------------------------------------------------
    delivery_distance = models.FloatField(default=0.0)
    delivery_weight = models.FloatField(default=0.0)
    delivery_price = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )

    status = models.CharField(
        max_length=20,
        choices=DeliveryOrderStatus.choices,
        default=INITIAL_STATUS,
    )

    class Meta:
        db_table = "delivery_orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="delivery_orders_status_idx"),
            models.Index(
                fields=["sender", "-created_at"],
                name="delivery_orders_sender_idx",
            ),
        ]

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def can_transition_to(self, new_status: str, role: ActorRole | str) -> bool:
        """Check *new_status* against *role*'s transition table."""
        return is_valid_transition(role, self.status, new_status)

    # ------------------------------------------------------------------
    # Value objects
    # ------------------------------------------------------------------

    @property
    def start_coordinates(self) -> Optional[Coordinates]:
        if self.start_latitude is None or self.start_longitude is None:
            return None
        return Coordinates(self.start_latitude, self.start_longitude, self.start_address)

    @start_coordinates.setter
    def start_coordinates(self, value: Optional[Coordinates]) -> None:
        self.start_latitude = value.latitude if value else None
        self.start_longitude = value.longitude if value else None
        self.start_address = value.address if value else ""

    @property
    def end_coordinates(self) -> Optional[Coordinates]:
        if self.end_latitude is None or self.end_longitude is None:
            return None
        return Coordinates(self.end_latitude, self.end_longitude, self.end_address)

    @end_coordinates.setter
    def end_coordinates(self, value: Optional[Coordinates]) -> None:
        self.end_latitude = value.latitude if value else None
        self.end_longitude = value.longitude if value else None
        self.end_address = value.address if value else ""

    @property
    def item_info(self) -> ItemInfo:
        return ItemInfo(
            length=self.item_length,
            width=self.item_width,
            height=self.item_height,
            weight=self.item_weight,
            quantity=self.item_quantity,
            remark=self.item_remark,
        )

    @item_info.setter
    def item_info(self, value: ItemInfo) -> None:
        self.item_length = value.length
        self.item_width = value.width
        self.item_height = value.height
        self.item_weight = value.weight
        self.item_quantity = value.quantity
        self.item_remark = value.remark

    @property
    def delivery_info(self) -> DeliveryInfo:
        return DeliveryInfo(
            distance=self.delivery_distance,
            weight=self.delivery_weight,
            price=self.delivery_price,
        )

    @delivery_info.setter
    def delivery_info(self, value: Optional[DeliveryInfo]) -> None:
        value = value or DeliveryInfo()
        self.delivery_distance = value.distance
        self.delivery_weight = value.weight
        self.delivery_price = value.price

    @property
    def receiver_info(self) -> ReceiverInfo:
        return ReceiverInfo(self.receiver_name, self.receiver_phone_number)

    @receiver_info.setter
    def receiver_info(self, value: ReceiverInfo) -> None:
        self.receiver_name = value.name
        self.receiver_phone_number = value.phone_number
        self.receiver_normalized_phone_number = value.normalized_phone_number

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.receiver_normalized_phone_number = normalize_phone_number(
            self.receiver_phone_number
        )
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "receiver_phone_number" in update_fields:
            kwargs["update_fields"] = list(update_fields) + [
                "receiver_normalized_phone_number"
            ]
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"DeliveryOrder[{self.pk}] ({self.status})"


class DeliveryOrderStatusHistory(BaseModel):
    """Append-only audit trail of delivery order status changes.

    ``old_status`` is ``None`` for the creation record.  ``actor_id`` is
    stored as text because senders are addressed by UUID and delivery
    agents by integer.
    """

    order = models.ForeignKey(
        "delivery_orders.DeliveryOrder",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=DeliveryOrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status = models.CharField(max_length=20, choices=DeliveryOrderStatus.choices)
    actor_role = models.CharField(max_length=20, choices=ActorRole.choices)
    actor_id = models.CharField(max_length=64, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "delivery_order_status_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["order", "-created_at"],
                name="dosh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_id}: {self.old_status} -> {self.new_status}"
