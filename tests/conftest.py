from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.accounts.models import Account, DeliveryAgent
from modules.accounts.repositories import (
    AccountDjangoRepository,
    DeliveryAgentDjangoRepository,
)
from modules.delivery_orders.dtos import (
    CoordinatesDTO,
    CreateDeliveryOrderDTO,
    DeliveryInfoDTO,
    ItemInfoDTO,
    ReceiverInfoDTO,
)
from modules.delivery_orders.repositories import DeliveryOrderDjangoRepository
from modules.delivery_orders.services import DeliveryOrderService

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Parties
# ---------------------------------------------------------------------------


@pytest.fixture()
def sender_user():
    return User.objects.create_user(username="uma", password="testpass123")


@pytest.fixture()
def sender(sender_user):
    return Account.objects.create(
        user=sender_user,
        name="Uma Sender",
        phone_number="06-1111 2222",
        email="uma@example.com",
    )


@pytest.fixture()
def receiver_account():
    return Account.objects.create(
        name="Bea Janssen",
        phone_number="+31 6 1234 5678",
        email="bea@example.com",
    )


@pytest.fixture()
def agent_user():
    return User.objects.create_user(username="courier", password="testpass123")


@pytest.fixture()
def delivery_agent(agent_user):
    account = Account.objects.create(
        user=agent_user,
        name="Dirk Courier",
        phone_number="+31 6 9999 0001",
        email="dirk@example.com",
    )
    return DeliveryAgent.objects.create(account=account)


@pytest.fixture()
def other_delivery_agent():
    account = Account.objects.create(
        name="Eva Courier",
        phone_number="+31 6 9999 0002",
        email="eva@example.com",
    )
    return DeliveryAgent.objects.create(account=account)


# ---------------------------------------------------------------------------
# Service / drafts
# ---------------------------------------------------------------------------


@pytest.fixture()
def service():
    return DeliveryOrderService(
        order_repository=DeliveryOrderDjangoRepository(),
        account_repository=AccountDjangoRepository(),
        delivery_agent_repository=DeliveryAgentDjangoRepository(),
    )


def _build_order_dto(**overrides) -> CreateDeliveryOrderDTO:
    """A complete draft; keyword arguments replace whole sections."""
    data = {
        "start_coordinates": CoordinatesDTO(
            latitude=52.3791, longitude=4.9003, address="Central Station"
        ),
        "end_coordinates": CoordinatesDTO(
            latitude=52.3580, longitude=4.8816, address="Museum Square"
        ),
        "item_info": ItemInfoDTO(
            length=30, width=20, height=10, weight=2.5, quantity=1, remark="Books"
        ),
        "delivery_info": DeliveryInfoDTO(
            distance=3.4, weight=2.5, price=Decimal("7.50")
        ),
        "receiver_info": ReceiverInfoDTO(name="Guest", phone_number="0612345678"),
        "receiver_account_id": None,
    }
    data.update(overrides)
    return CreateDeliveryOrderDTO(**data)


@pytest.fixture()
def make_order_dto():
    return _build_order_dto


@pytest.fixture()
def order_dto():
    return _build_order_dto()


@pytest.fixture()
def created_order(service, sender, order_dto):
    return service.create_order(sender.user_id, order_dto)


def _order_payload(**overrides) -> dict:
    """JSON body for ``POST /api/v1/delivery-orders/``."""
    payload = {
        "start_coordinates": {
            "latitude": 52.3791,
            "longitude": 4.9003,
            "address": "Central Station",
        },
        "end_coordinates": {
            "latitude": 52.3580,
            "longitude": 4.8816,
            "address": "Museum Square",
        },
        "item_info": {"length": 30, "width": 20, "height": 10, "weight": 2.5},
        "delivery_info": {"distance": 3.4, "weight": 2.5, "price": "7.50"},
        "receiver_info": {"name": "Guest", "phone_number": "0612345678"},
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_order_payload():
    return _order_payload
