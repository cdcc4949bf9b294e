"""Unit tests for the delivery order input DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.delivery_orders.dtos import (
    CoordinatesDTO,
    CreateDeliveryOrderDTO,
    DeliveryInfoDTO,
    ItemInfoDTO,
    ReceiverInfoDTO,
)
from modules.delivery_orders.value_objects import Coordinates, DeliveryInfo, ItemInfo

pytestmark = pytest.mark.unit


class TestCoordinatesDTO:
    def test_to_value(self):
        dto = CoordinatesDTO(latitude=52.37, longitude=4.9, address="Dam")
        assert dto.to_value() == Coordinates(52.37, 4.9, "Dam")

    @pytest.mark.parametrize(
        "latitude,longitude", [(91, 0), (-91, 0), (0, 181), (0, -181)]
    )
    def test_out_of_range(self, latitude, longitude):
        with pytest.raises(ValidationError):
            CoordinatesDTO(latitude=latitude, longitude=longitude)


class TestItemInfoDTO:
    def test_defaults(self):
        assert ItemInfoDTO().to_value() == ItemInfo()

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="Quantity must be at least 1"):
            ItemInfoDTO(quantity=0)

    def test_negative_dimension_rejected(self):
        with pytest.raises(ValidationError):
            ItemInfoDTO(weight=-1)


class TestDeliveryInfoDTO:
    def test_to_value(self):
        dto = DeliveryInfoDTO(distance=3.4, weight=2.5, price="7.50")
        assert dto.to_value() == DeliveryInfo(3.4, 2.5, Decimal("7.50"))

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            DeliveryInfoDTO(price=Decimal("-1.00"))


class TestCreateDeliveryOrderDTO:
    def test_everything_is_optional(self):
        dto = CreateDeliveryOrderDTO()
        assert dto.start_coordinates is None
        assert dto.delivery_info is None
        assert dto.receiver_info == ReceiverInfoDTO()
        assert dto.receiver_account_id is None

    def test_is_frozen(self):
        dto = CreateDeliveryOrderDTO()
        with pytest.raises(ValidationError):
            dto.receiver_account_id = "x"

    def test_receiver_info_normalizes_on_conversion(self):
        dto = ReceiverInfoDTO(name="Abun", phone_number="012-345 6495")
        assert dto.to_value().normalized_phone_number == "0123456495"
