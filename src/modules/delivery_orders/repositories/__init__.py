"""Delivery order repositories package."""

from modules.delivery_orders.repositories.django_repository import (
    DeliveryOrderDjangoRepository,
)
from modules.delivery_orders.repositories.interfaces import IDeliveryOrderRepository

__all__ = ["DeliveryOrderDjangoRepository", "IDeliveryOrderRepository"]
