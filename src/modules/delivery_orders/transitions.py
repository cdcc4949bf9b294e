"""Pure status-transition predicates.

No persistence here: these functions take ``(current, target)`` status
values and answer from the role tables in ``constants``.
"""

from __future__ import annotations

from typing import Any

from modules.delivery_orders.constants import (
    TRANSITIONS_BY_ROLE,
    ActorRole,
    DeliveryOrderStatus,
)
from modules.delivery_orders.exceptions import UnknownOrderStatus


def coerce_status(value: Any) -> DeliveryOrderStatus:
    """Return *value* as a ``DeliveryOrderStatus``.

    Raises:
        UnknownOrderStatus: *value* is not one of the seven recognised states.
    """
    try:
        return DeliveryOrderStatus(value)
    except ValueError:
        raise UnknownOrderStatus(f"Unknown delivery order status: {value!r}") from None


def allowed_transitions(role: ActorRole | str, current: Any) -> frozenset[str]:
    """Statuses *role* may move an order to from *current*."""
    table = TRANSITIONS_BY_ROLE[ActorRole(role)]
    return table[coerce_status(current)]


def is_valid_transition(role: ActorRole | str, current: Any, target: Any) -> bool:
    """Check ``current -> target`` against *role*'s transition table.

    Both statuses are validated first, so an unrecognised value raises
    ``UnknownOrderStatus`` instead of quietly answering ``False``.
    """
    target_status = coerce_status(target)
    return target_status in allowed_transitions(role, current)


def can_agent_transition(current: Any, target: Any) -> bool:
    return is_valid_transition(ActorRole.DELIVERY_AGENT, current, target)


def can_sender_transition(current: Any, target: Any) -> bool:
    return is_valid_transition(ActorRole.SENDER, current, target)
