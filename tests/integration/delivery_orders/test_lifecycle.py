"""Integration tests for the delivery order lifecycle.

Runs the service against the Django repositories and the test database:
creation, role-scoped status updates, assignment and soft-delete
visibility.
"""

from __future__ import annotations

from uuid import uuid4

import pytest
from freezegun import freeze_time

from modules.delivery_orders.constants import ActorRole, DeliveryOrderStatus as S
from modules.delivery_orders.dtos import ReceiverInfoDTO
from modules.delivery_orders.exceptions import (
    DeliveryAgentNotFound,
    InvalidStatusTransition,
    OrderAccessDenied,
    OrderNotFound,
    SenderNotFound,
)
from modules.delivery_orders.models import DeliveryOrder

pytestmark = pytest.mark.integration


def _reload(order: DeliveryOrder) -> DeliveryOrder:
    return DeliveryOrder.objects.get(pk=order.pk)


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestCreation:
    def test_guest_receiver_scenario(self, service, sender, make_order_dto):
        dto = make_order_dto(
            receiver_info=ReceiverInfoDTO(name="Abun", phone_number="0123456495"),
            receiver_account_id=None,
        )

        order = _reload(service.create_order(sender.user_id, dto))

        assert order.status == S.CREATED
        assert order.receiver_account_id is None
        assert order.receiver_info.name == "Abun"
        assert order.receiver_info.normalized_phone_number == "0123456495"

    def test_unresolvable_receiver_id_is_a_guest(self, service, sender, make_order_dto):
        dto = make_order_dto(
            receiver_info=ReceiverInfoDTO(name="Abun", phone_number="012-345 6495"),
            receiver_account_id=str(uuid4()),
        )

        order = _reload(service.create_order(sender.user_id, dto))

        assert order.receiver_account_id is None
        assert order.receiver_normalized_phone_number == "0123456495"

    def test_malformed_receiver_id_is_a_guest(self, service, sender, make_order_dto):
        order = service.create_order(
            sender.user_id, make_order_dto(receiver_account_id="not-a-uuid")
        )
        assert order.receiver_account_id is None

    def test_registered_receiver_overrides_fallback(
        self, service, sender, receiver_account, make_order_dto
    ):
        dto = make_order_dto(
            receiver_info=ReceiverInfoDTO(name="Typed", phone_number="0600000000"),
            receiver_account_id=str(receiver_account.id),
        )

        order = _reload(service.create_order(sender.user_id, dto))

        assert order.receiver_account_id == receiver_account.id
        assert order.receiver_name == "Bea Janssen"
        assert order.receiver_phone_number == "+31 6 1234 5678"
        assert order.receiver_normalized_phone_number == "+31612345678"

    def test_sender_snapshot_and_id_assigned(self, created_order, sender):
        order = _reload(created_order)

        assert order.pk is not None
        assert order.sender_id == sender.id
        assert order.sender_name == "Uma Sender"
        assert order.sender_phone_number == "06-1111 2222"
        assert order.delivery_agent_id is None

    def test_initial_history_entry(self, created_order, sender):
        (entry,) = created_order.status_history.all()

        assert entry.old_status is None
        assert entry.new_status == S.CREATED
        assert entry.actor_role == ActorRole.SENDER
        assert entry.actor_id == str(sender.id)

    def test_actor_without_account(self, service, order_dto):
        with pytest.raises(SenderNotFound):
            service.create_order(123456, order_dto)
        assert DeliveryOrder.objects.count() == 0


# ---------------------------------------------------------------------------
# Agent updates
# ---------------------------------------------------------------------------


class TestAgentUpdates:
    def test_agent_cannot_skip_acceptance(self, service, created_order, delivery_agent):
        with pytest.raises(InvalidStatusTransition):
            service.update_status_by_agent(delivery_agent.id, created_order.id, "InProgress")

        order = _reload(created_order)
        assert order.status == S.CREATED
        assert order.status_history.count() == 1

    def test_full_agent_path(self, service, created_order, delivery_agent):
        agent_id = delivery_agent.id
        for target in (S.ACCEPTED, S.IN_PROGRESS, S.DELIVERED):
            service.update_status_by_agent(agent_id, created_order.id, target)

        order = _reload(created_order)
        assert order.status == S.DELIVERED
        assert order.status_history.count() == 4

    def test_in_progress_cannot_go_back_to_accepted(
        self, service, created_order, delivery_agent
    ):
        service.update_status_by_agent(delivery_agent.id, created_order.id, S.ACCEPTED)
        service.update_status_by_agent(delivery_agent.id, created_order.id, S.IN_PROGRESS)

        with pytest.raises(InvalidStatusTransition):
            service.update_status_by_agent(delivery_agent.id, created_order.id, S.ACCEPTED)

        assert _reload(created_order).status == S.IN_PROGRESS

    def test_status_change_bumps_updated_at(self, service, created_order, delivery_agent):
        with freeze_time("2030-01-01 12:00:00"):
            service.update_status_by_agent(delivery_agent.id, created_order.id, S.ACCEPTED)

        order = _reload(created_order)
        assert order.updated_at.year == 2030
        assert order.created_at < order.updated_at

    def test_unknown_agent(self, service, created_order):
        with pytest.raises(DeliveryAgentNotFound):
            service.update_status_by_agent(987654, created_order.id, S.ACCEPTED)

    def test_deleted_order_is_invisible(self, service, created_order, delivery_agent):
        created_order.delete()

        with pytest.raises(OrderNotFound):
            service.update_status_by_agent(delivery_agent.id, created_order.id, S.ACCEPTED)


# ---------------------------------------------------------------------------
# Sender updates
# ---------------------------------------------------------------------------


class TestSenderUpdates:
    def test_sender_cancels_created_order(self, service, created_order, sender):
        service.update_status_by_sender(created_order.id, S.CANCELED, sender.id, "oops")

        order = _reload(created_order)
        assert order.status == S.CANCELED
        entry = order.status_history.get(new_status=S.CANCELED)
        assert entry.notes == "oops"

    def test_delivered_to_exception_then_cancel_rejected(
        self, service, created_order, sender, delivery_agent
    ):
        for target in (S.ACCEPTED, S.IN_PROGRESS, S.DELIVERED):
            service.update_status_by_agent(delivery_agent.id, created_order.id, target)

        service.update_status_by_sender(created_order.id, S.EXCEPTION, sender.id)
        assert _reload(created_order).status == S.EXCEPTION

        with pytest.raises(InvalidStatusTransition):
            service.update_status_by_sender(created_order.id, S.CANCELED, sender.id)
        assert _reload(created_order).status == S.EXCEPTION

    def test_non_owner_is_forbidden_even_for_valid_transition(
        self, service, created_order, receiver_account
    ):
        with pytest.raises(OrderAccessDenied):
            service.update_status_by_sender(
                created_order.id, S.CANCELED, receiver_account.id
            )

        assert _reload(created_order).status == S.CREATED

    def test_deleted_order_is_invisible(self, service, created_order, sender):
        created_order.delete()

        with pytest.raises(OrderNotFound):
            service.update_status_by_sender(created_order.id, S.CANCELED, sender.id)


# ---------------------------------------------------------------------------
# Assignment
# ---------------------------------------------------------------------------


class TestAssignment:
    def test_assign_forces_accepted(self, service, created_order, delivery_agent):
        service.assign_delivery_agent(created_order.id, delivery_agent.id)

        order = _reload(created_order)
        assert order.status == S.ACCEPTED
        assert order.delivery_agent_id == delivery_agent.id

    def test_reassignment_keeps_accepted(
        self, service, created_order, delivery_agent, other_delivery_agent
    ):
        service.assign_delivery_agent(created_order.id, delivery_agent.id)
        service.assign_delivery_agent(created_order.id, other_delivery_agent.id)

        order = _reload(created_order)
        assert order.status == S.ACCEPTED
        assert order.delivery_agent_id == other_delivery_agent.id
        assert order.status_history.count() == 3

    def test_assign_from_terminal_status(self, service, created_order, sender, delivery_agent):
        service.update_status_by_sender(created_order.id, S.CANCELED, sender.id)

        service.assign_delivery_agent(created_order.id, delivery_agent.id)

        assert _reload(created_order).status == S.ACCEPTED

    def test_assign_reaches_soft_deleted_order(
        self, service, created_order, delivery_agent
    ):
        created_order.delete()

        service.assign_delivery_agent(created_order.id, delivery_agent.id)

        order = _reload(created_order)
        assert order.is_deleted
        assert order.status == S.ACCEPTED

    def test_assign_missing_order(self, service, delivery_agent):
        with pytest.raises(OrderNotFound):
            service.assign_delivery_agent(999999, delivery_agent.id)

    def test_assign_missing_agent(self, service, created_order):
        with pytest.raises(DeliveryAgentNotFound):
            service.assign_delivery_agent(created_order.id, 999999)

        assert _reload(created_order).delivery_agent_id is None

    def test_agent_continues_after_assignment(
        self, service, created_order, delivery_agent
    ):
        service.assign_delivery_agent(created_order.id, delivery_agent.id)
        service.update_status_by_agent(delivery_agent.id, created_order.id, S.IN_PROGRESS)

        assert _reload(created_order).status == S.IN_PROGRESS
