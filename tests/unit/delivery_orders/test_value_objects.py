"""Unit tests for delivery order value objects and their model mapping."""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest

from modules.delivery_orders.models import DeliveryOrder
from modules.delivery_orders.value_objects import (
    Coordinates,
    DeliveryInfo,
    ItemInfo,
    ReceiverInfo,
)

pytestmark = pytest.mark.unit


class TestReceiverInfo:
    def test_normalized_phone_is_derived(self):
        info = ReceiverInfo("Abun", "012-345 6495")
        assert info.normalized_phone_number == "0123456495"

    def test_normalized_phone_is_not_a_constructor_argument(self):
        with pytest.raises(TypeError):
            ReceiverInfo("Abun", "0123456495", "999")  # type: ignore[call-arg]

    def test_is_immutable(self):
        info = ReceiverInfo("Abun", "0123456495")
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.phone_number = "1"  # type: ignore[misc]

    def test_equality_is_by_value(self):
        assert ReceiverInfo("Abun", "012 3456495") == ReceiverInfo(
            "Abun", "012 3456495"
        )


class TestDefaults:
    def test_item_info_defaults(self):
        item = ItemInfo()
        assert item.quantity == 1
        assert item.remark == ""

    def test_delivery_info_defaults_to_zero(self):
        info = DeliveryInfo()
        assert info.distance == 0.0
        assert info.weight == 0.0
        assert info.price == Decimal("0.00")


class TestModelMapping:
    def test_missing_coordinates_read_as_none(self):
        order = DeliveryOrder()
        assert order.start_coordinates is None
        assert order.end_coordinates is None

    def test_coordinates_round_trip_through_columns(self):
        order = DeliveryOrder()
        order.start_coordinates = Coordinates(52.37, 4.90, "Central Station")

        assert order.start_latitude == 52.37
        assert order.start_address == "Central Station"
        assert order.start_coordinates == Coordinates(52.37, 4.90, "Central Station")

    def test_clearing_coordinates(self):
        order = DeliveryOrder()
        order.end_coordinates = Coordinates(1.0, 2.0)
        order.end_coordinates = None
        assert order.end_latitude is None
        assert order.end_coordinates is None

    def test_delivery_info_none_resets_to_defaults(self):
        order = DeliveryOrder()
        order.delivery_info = DeliveryInfo(3.0, 2.0, Decimal("9.99"))
        order.delivery_info = None
        assert order.delivery_info == DeliveryInfo()

    def test_receiver_info_setter_stores_normalized_phone(self):
        order = DeliveryOrder()
        order.receiver_info = ReceiverInfo("Abun", "+31 6 1234 5678")

        assert order.receiver_phone_number == "+31 6 1234 5678"
        assert order.receiver_normalized_phone_number == "+31612345678"
        assert order.receiver_info.normalized_phone_number == "+31612345678"

    def test_item_info_replaced_wholesale(self):
        order = DeliveryOrder()
        order.item_info = ItemInfo(10, 20, 30, 4.5, 2, "fragile")
        assert order.item_info == ItemInfo(10, 20, 30, 4.5, 2, "fragile")
