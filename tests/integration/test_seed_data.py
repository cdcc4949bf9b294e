"""Integration tests for the ``seed_data`` management command."""

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.accounts.models import Account, DeliveryAgent
from modules.core.models import OutboxEvent
from modules.delivery_orders.constants import DeliveryOrderStatus
from modules.delivery_orders.models import DeliveryOrder

pytestmark = pytest.mark.integration


def _seed(*args):
    out = StringIO()
    call_command("seed_data", *args, stdout=out)
    return out.getvalue()


class TestSeedData:
    def test_creates_parties(self):
        _seed("--orders", "0")

        assert get_user_model().objects.filter(username="admin").exists()
        assert Account.objects.count() == 5
        assert DeliveryAgent.objects.count() == 2

    def test_orders_cover_the_lifecycle(self):
        output = _seed()

        assert "orders=12" in output
        statuses = set(DeliveryOrder.objects.values_list("status", flat=True))
        assert statuses == {
            DeliveryOrderStatus.CREATED,
            DeliveryOrderStatus.ACCEPTED,
            DeliveryOrderStatus.IN_PROGRESS,
            DeliveryOrderStatus.DELIVERED,
            DeliveryOrderStatus.EXCEPTION,
            DeliveryOrderStatus.CANCELED,
        }

    def test_orders_go_through_the_service(self):
        _seed("--orders", "6")

        for order in DeliveryOrder.objects.all():
            assert order.status_history.exists()
        assert OutboxEvent.objects.filter(event_type="DeliveryOrderCreated").count() == 6

    def test_guest_and_registered_receivers(self):
        _seed("--orders", "3")

        assert DeliveryOrder.objects.filter(receiver_account__isnull=True).count() == 1
        assert DeliveryOrder.objects.filter(receiver_account__isnull=False).count() == 2

    def test_is_idempotent(self):
        _seed("--orders", "4")
        output = _seed("--orders", "4")

        assert "Skipping orders (already seeded)." in output
        assert DeliveryOrder.objects.count() == 4
        assert Account.objects.count() == 5
