"""Structural completeness check for delivery orders."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modules.delivery_orders.models import DeliveryOrder

COORDINATES_ERROR = "Coordinates error!"
RECEIVER_INFO_ERROR = "Receiver info error!"
DELIVERY_INFO_ERROR = "Delivery info error!"


def validate_delivery_order(order: DeliveryOrder) -> tuple[bool, str]:
    """Return ``(is_valid, message)`` for *order*.

    Checks, in order: both route coordinates present; receiver name and
    normalized phone not blank; non-zero delivery distance and weight.
    The message names the first failing check and is empty when valid.
    """
    if order.start_coordinates is None or order.end_coordinates is None:
        return False, COORDINATES_ERROR

    receiver = order.receiver_info
    if not receiver.name.strip() or not receiver.normalized_phone_number:
        return False, RECEIVER_INFO_ERROR

    delivery = order.delivery_info
    if not delivery.distance or not delivery.weight:
        return False, DELIVERY_INFO_ERROR

    return True, ""
