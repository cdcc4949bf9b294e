"""Delivery order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.delivery_orders.models import DeliveryOrder, DeliveryOrderStatusHistory

# ---------------------------------------------------------------------------
# Value objects (shared by input and output)
# ---------------------------------------------------------------------------


class CoordinatesSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    address = serializers.CharField(required=False, default="", allow_blank=True)


class ItemInfoSerializer(serializers.Serializer):
    length = serializers.FloatField(min_value=0, required=False, default=0.0)
    width = serializers.FloatField(min_value=0, required=False, default=0.0)
    height = serializers.FloatField(min_value=0, required=False, default=0.0)
    weight = serializers.FloatField(min_value=0, required=False, default=0.0)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)
    remark = serializers.CharField(required=False, default="", allow_blank=True)


class DeliveryInfoSerializer(serializers.Serializer):
    distance = serializers.FloatField(min_value=0, required=False, default=0.0)
    weight = serializers.FloatField(min_value=0, required=False, default=0.0)
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        default=Decimal("0.00"),
    )


class ReceiverInfoSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, default="", allow_blank=True)
    phone_number = serializers.CharField(required=False, default="", allow_blank=True)
    normalized_phone_number = serializers.CharField(read_only=True)


# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateDeliveryOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload.

    The sender is the authenticated caller and is not accepted here.
    """

    start_coordinates = CoordinatesSerializer(required=False, allow_null=True)
    end_coordinates = CoordinatesSerializer(required=False, allow_null=True)
    item_info = ItemInfoSerializer(required=False)
    delivery_info = DeliveryInfoSerializer(required=False, allow_null=True)
    receiver_info = ReceiverInfoSerializer(required=False)
    receiver_account_id = serializers.CharField(
        required=False, allow_null=True, allow_blank=True
    )


class StatusUpdateSerializer(serializers.Serializer):
    """Validates a status change request.

    ``status`` is free text on purpose: unknown values are rejected by the
    service with a typed error.
    """

    status = serializers.CharField(max_length=20)
    notes = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class StatusHistorySerializer(serializers.ModelSerializer):
    """Read serializer for order status history records."""

    class Meta:
        model = DeliveryOrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "actor_role",
            "actor_id",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class DeliveryOrderSerializer(serializers.ModelSerializer):
    """Read serializer for delivery orders with value objects and history."""

    start_coordinates = CoordinatesSerializer(read_only=True)
    end_coordinates = CoordinatesSerializer(read_only=True)
    item_info = ItemInfoSerializer(read_only=True)
    delivery_info = DeliveryInfoSerializer(read_only=True)
    receiver_info = ReceiverInfoSerializer(read_only=True)
    status_history = StatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = DeliveryOrder
        fields = [
            "id",
            "status",
            "sender_id",
            "sender_name",
            "sender_phone_number",
            "receiver_account_id",
            "receiver_info",
            "delivery_agent_id",
            "start_coordinates",
            "end_coordinates",
            "item_info",
            "delivery_info",
            "created_at",
            "updated_at",
            "status_history",
        ]
        read_only_fields = fields


class DeliveryOrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order lists (no history)."""

    receiver_info = ReceiverInfoSerializer(read_only=True)

    class Meta:
        model = DeliveryOrder
        fields = [
            "id",
            "status",
            "sender_id",
            "receiver_info",
            "delivery_agent_id",
            "created_at",
        ]
        read_only_fields = fields
