"""Account and DeliveryAgent models.

Both are read-only lookups from the point of view of the delivery order
lifecycle: orders reference them by id and copy what they need (sender
snapshot, receiver contact), but never modify them.

- ``Account``: a registered person who can send or receive deliveries.
  Optionally linked to a login ``User``; the HTTP layer uses that link to
  turn an authenticated request into an account id.
- ``DeliveryAgent``: the courier profile of an account.  Agents are
  addressed by a numeric id.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel, TimestampedModel


class Account(BaseModel):
    """Registered sender/receiver."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="account",
    )
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=32, blank=True, default="")
    email = models.EmailField(max_length=254, blank=True, default="")

    class Meta:
        db_table = "accounts"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class DeliveryAgent(TimestampedModel):
    """Courier profile; ``id`` is the numeric delivery agent id."""

    account = models.OneToOneField(
        "accounts.Account",
        on_delete=models.PROTECT,
        related_name="delivery_agent",
    )

    class Meta:
        db_table = "delivery_agents"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"DeliveryAgent[{self.pk}] {self.account}"
