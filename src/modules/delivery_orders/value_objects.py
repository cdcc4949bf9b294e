"""Value objects owned by a delivery order.

They have no identity: the order stores their fields in its own columns
and swaps them out wholesale (``order.item_info = ItemInfo(...)``), never
field by field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from shared.domain.phone import normalize_phone_number


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float
    address: str = ""


@dataclass(frozen=True)
class ItemInfo:
    """Parcel description supplied by the sender."""

    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    weight: float = 0.0
    quantity: int = 1
    remark: str = ""


@dataclass(frozen=True)
class DeliveryInfo:
    """Computed delivery figures: distance, chargeable weight and price."""

    distance: float = 0.0
    weight: float = 0.0
    price: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class ReceiverInfo:
    """Receiver contact record.

    ``normalized_phone_number`` is not a constructor argument: it is always
    derived from ``phone_number``.
    """

    name: str
    phone_number: str
    normalized_phone_number: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "normalized_phone_number",
            normalize_phone_number(self.phone_number),
        )
