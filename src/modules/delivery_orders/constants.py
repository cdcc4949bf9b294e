"""Delivery order constants.

Defines the status choices, the actor roles, and the role-scoped
transition tables for the delivery order state machine.

Senders and delivery agents have disjoint authority over an order, so
each role gets its own table.  A state missing from a table, or mapped
to an empty set, admits no transition for that role.
"""

from django.db import models


class DeliveryOrderStatus(models.TextChoices):
    CREATED = "Created", "Created"
    ACCEPTED = "Accepted", "Accepted"
    IN_PROGRESS = "InProgress", "In progress"
    DELIVERED = "Delivered", "Delivered"
    EXCEPTION = "Exception", "Exception"
    CANCELED = "Canceled", "Canceled"
    CLOSED = "Closed", "Closed"


class ActorRole(models.TextChoices):
    SENDER = "sender", "Sender"
    DELIVERY_AGENT = "delivery_agent", "Delivery agent"


INITIAL_STATUS = DeliveryOrderStatus.CREATED

# Status forced by agent assignment, bypassing the tables below.
ASSIGNED_STATUS = DeliveryOrderStatus.ACCEPTED

AGENT_TRANSITIONS: dict[str, frozenset[str]] = {
    DeliveryOrderStatus.CREATED: frozenset({DeliveryOrderStatus.ACCEPTED}),
    DeliveryOrderStatus.ACCEPTED: frozenset({DeliveryOrderStatus.IN_PROGRESS}),
    DeliveryOrderStatus.IN_PROGRESS: frozenset(
        {DeliveryOrderStatus.DELIVERED, DeliveryOrderStatus.EXCEPTION}
    ),
    DeliveryOrderStatus.DELIVERED: frozenset(),
    DeliveryOrderStatus.EXCEPTION: frozenset(),
    DeliveryOrderStatus.CANCELED: frozenset(),
    DeliveryOrderStatus.CLOSED: frozenset(),
}

SENDER_TRANSITIONS: dict[str, frozenset[str]] = {
    DeliveryOrderStatus.CREATED: frozenset({DeliveryOrderStatus.CANCELED}),
    DeliveryOrderStatus.ACCEPTED: frozenset(),
    DeliveryOrderStatus.IN_PROGRESS: frozenset(),
    DeliveryOrderStatus.DELIVERED: frozenset({DeliveryOrderStatus.EXCEPTION}),
    DeliveryOrderStatus.EXCEPTION: frozenset(),
    DeliveryOrderStatus.CANCELED: frozenset(),
    DeliveryOrderStatus.CLOSED: frozenset(),
}

TRANSITIONS_BY_ROLE: dict[str, dict[str, frozenset[str]]] = {
    ActorRole.SENDER: SENDER_TRANSITIONS,
    ActorRole.DELIVERY_AGENT: AGENT_TRANSITIONS,
}

OUTBOX_TOPIC = "delivery_orders"
