"""Delivery order domain exceptions.

Raised by the service layer when a lifecycle operation is rejected.
Every exception carries an ``ErrorKind`` so callers (the HTTP views, the
seed command, tests) can branch on the kind of failure without matching
on messages.  A rejected operation never leaves a partial write behind:
services run inside a transaction and validate before mutating.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    INVALID_TRANSITION = "invalid_transition"
    INVALID_ARGUMENT = "invalid_argument"
    VALIDATION_FAILED = "validation_failed"


class DeliveryOrderError(Exception):
    """Base class for every lifecycle failure."""

    kind: ClassVar[ErrorKind]


# ---------------------------------------------------------------------------
# NotFound
# ---------------------------------------------------------------------------


class NotFound(DeliveryOrderError):
    """A referenced account, agent or order does not exist or is invisible."""

    kind = ErrorKind.NOT_FOUND


class SenderNotFound(NotFound):
    """The acting user id does not resolve to a registered account."""


class DeliveryAgentNotFound(NotFound):
    """The delivery agent id does not resolve."""


class OrderNotFound(NotFound):
    """The order does not exist or has been soft-deleted."""


# ---------------------------------------------------------------------------
# Authorization / state machine / arguments
# ---------------------------------------------------------------------------


class OrderAccessDenied(DeliveryOrderError):
    """The actor has no authority over the target order."""

    kind = ErrorKind.FORBIDDEN


class InvalidStatusTransition(DeliveryOrderError):
    """The status change is not in the actor role's transition table."""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, current: Any, target: Any) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Invalid status transition: {current}->{target}")


class UnknownOrderStatus(DeliveryOrderError, ValueError):
    """A status value outside the recognised set (programming error)."""

    kind = ErrorKind.INVALID_ARGUMENT


class OrderValidationFailed(DeliveryOrderError):
    """The order is structurally incomplete (missing route, receiver, ...)."""

    kind = ErrorKind.VALIDATION_FAILED
