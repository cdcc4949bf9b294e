"""Delivery order URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.delivery_orders.views import DeliveryOrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("delivery-orders", DeliveryOrderViewSet, basename="delivery-order")

urlpatterns = router.urls
