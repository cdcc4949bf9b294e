"""Delivery order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CoordinatesDTO`` / ``ItemInfoDTO`` / ``DeliveryInfoDTO`` /
  ``ReceiverInfoDTO``: nested parts of a draft, each convertible to
  its domain value object via ``to_value()``.
- ``CreateDeliveryOrderDTO``: input for order creation.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.delivery_orders.value_objects import (
    Coordinates,
    DeliveryInfo,
    ItemInfo,
    ReceiverInfo,
)


class CoordinatesDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address: str = ""

    def to_value(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude, self.address)


class ItemInfoDTO(BaseModel):
    """Parcel dimensions (any unit the caller is consistent about)."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(default=0.0, ge=0)
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)
    weight: float = Field(default=0.0, ge=0)
    quantity: int = 1
    remark: str = ""

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    def to_value(self) -> ItemInfo:
        return ItemInfo(
            length=self.length,
            width=self.width,
            height=self.height,
            weight=self.weight,
            quantity=self.quantity,
            remark=self.remark,
        )


class DeliveryInfoDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    distance: float = Field(default=0.0, ge=0)
    weight: float = Field(default=0.0, ge=0)
    price: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)

    def to_value(self) -> DeliveryInfo:
        return DeliveryInfo(
            distance=self.distance, weight=self.weight, price=self.price
        )


class ReceiverInfoDTO(BaseModel):
    """Free-text receiver contact typed by the sender.

    Only used when the receiver is not a registered account.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    phone_number: str = ""

    def to_value(self) -> ReceiverInfo:
        return ReceiverInfo(self.name, self.phone_number)


class CreateDeliveryOrderDTO(BaseModel):
    """Immutable DTO for delivery order creation requests.

    The sender is never part of the payload: it is the acting user,
    passed to the service separately.  Completeness (both coordinates,
    receiver contact, delivery figures) is checked by the service, not
    here, so that enforcement stays switchable.
    """

    model_config = ConfigDict(frozen=True)

    start_coordinates: Optional[CoordinatesDTO] = None
    end_coordinates: Optional[CoordinatesDTO] = None
    item_info: ItemInfoDTO = Field(default_factory=ItemInfoDTO)
    delivery_info: Optional[DeliveryInfoDTO] = None
    receiver_info: ReceiverInfoDTO = Field(default_factory=ReceiverInfoDTO)
    receiver_account_id: Optional[str] = None
