"""Delivery order API views.

Exposes ``DeliveryOrderService`` via HTTP using a DRF ViewSet.
The acting account is resolved here, from the authenticated user, and
handed to the service explicitly.  Domain exceptions are translated by
their ``kind``: every not-found and forbidden outcome is a 404 so that
callers cannot probe for orders they have no access to.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.accounts.repositories import (
    AccountDjangoRepository,
    DeliveryAgentDjangoRepository,
)
from modules.core.pagination import StandardResultsSetPagination
from modules.delivery_orders.dtos import (
    CoordinatesDTO,
    CreateDeliveryOrderDTO,
    DeliveryInfoDTO,
    ItemInfoDTO,
    ReceiverInfoDTO,
)
from modules.delivery_orders.exceptions import DeliveryOrderError, ErrorKind
from modules.delivery_orders.filters import DeliveryOrderFilter
from modules.delivery_orders.models import DeliveryOrder
from modules.delivery_orders.repositories import DeliveryOrderDjangoRepository
from modules.delivery_orders.serializers import (
    CreateDeliveryOrderSerializer,
    DeliveryOrderListSerializer,
    DeliveryOrderSerializer,
    StatusUpdateSerializer,
)
from modules.delivery_orders.services import DeliveryOrderService

logger = structlog.get_logger(__name__)

NOT_FOUND_DETAIL = "Delivery order not found."

_HTTP_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
}


def error_response(exc: DeliveryOrderError) -> Response:
    """Translate a domain error into an HTTP response."""
    detail = NOT_FOUND_DETAIL if exc.kind == ErrorKind.FORBIDDEN else str(exc)
    return Response(
        {"detail": detail, "code": str(exc.kind)},
        status=_HTTP_STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST),
    )


def _not_found() -> Response:
    return Response({"detail": NOT_FOUND_DETAIL}, status=status.HTTP_404_NOT_FOUND)


class DeliveryOrderViewSet(GenericViewSet):
    """ViewSet for delivery order operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = DeliveryOrder.objects.none()
    filterset_class = DeliveryOrderFilter
    ordering_fields = ["created_at", "updated_at", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._service = DeliveryOrderService(
            order_repository=DeliveryOrderDjangoRepository(),
            account_repository=AccountDjangoRepository(),
            delivery_agent_repository=DeliveryAgentDjangoRepository(),
            enforce_validation=getattr(
                settings, "DELIVERY_ORDER_ENFORCE_VALIDATION", True
            ),
            assign_includes_deleted=getattr(
                settings, "DELIVERY_ORDER_ASSIGN_INCLUDES_DELETED", True
            ),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Per-action throttling scopes."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "delivery_order_creation"
        elif self.action in {"list", "retrieve"}:
            throttle_scope = "delivery_order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Actor context
    # ------------------------------------------------------------------

    def _account(self, request: Request) -> Optional[Any]:
        return getattr(request.user, "account", None)

    def _delivery_agent(self, request: Request) -> Optional[Any]:
        account = self._account(request)
        if account is None:
            return None
        return getattr(account, "delivery_agent", None)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/delivery-orders/"""
        create_serializer = CreateDeliveryOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)
        data = create_serializer.validated_data

        start = data.get("start_coordinates")
        end = data.get("end_coordinates")
        delivery = data.get("delivery_info")
        dto = CreateDeliveryOrderDTO(
            start_coordinates=CoordinatesDTO(**start) if start else None,
            end_coordinates=CoordinatesDTO(**end) if end else None,
            item_info=ItemInfoDTO(**data.get("item_info", {})),
            delivery_info=DeliveryInfoDTO(**delivery) if delivery else None,
            receiver_info=ReceiverInfoDTO(**data.get("receiver_info", {})),
            receiver_account_id=data.get("receiver_account_id") or None,
        )

        try:
            order = self._service.create_order(request.user.pk, dto)
        except DeliveryOrderError as exc:
            return error_response(exc)

        out = DeliveryOrderSerializer(self._service.get_order(order.id))
        return Response(out.data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        account = self._account(self.request)
        if account is None:
            return DeliveryOrder.objects.none()
        return self._service.list_orders({"sender_id": account.id})

    def list(self, request: Request) -> Response:
        """GET /api/v1/delivery-orders/

        Lists the orders the caller has sent.  Filtering and ordering are
        handled by ``filter_backends``.  Results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = DeliveryOrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/delivery-orders/{pk}/

        Visible to the order's sender and to its assigned delivery agent.
        """
        try:
            order = self._service.get_order(pk)
        except DeliveryOrderError as exc:
            return error_response(exc)

        account = self._account(request)
        agent = self._delivery_agent(request)
        is_sender = account is not None and order.sender_id == account.id
        is_agent = agent is not None and order.delivery_agent_id == agent.id
        if not (is_sender or is_agent):
            return _not_found()

        return Response(DeliveryOrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status updates
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], url_path="sender-status")
    def sender_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/delivery-orders/{pk}/sender-status/"""
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        account = self._account(request)
        if account is None:
            return _not_found()

        try:
            order = self._service.update_status_by_sender(
                order_id=pk,
                new_status=serializer.validated_data["status"],
                sender_id=account.id,
                notes=serializer.validated_data["notes"],
            )
        except DeliveryOrderError as exc:
            return error_response(exc)

        return Response(DeliveryOrderSerializer(self._service.get_order(order.id)).data)

    @action(detail=True, methods=["post"], url_path="agent-status")
    def agent_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/delivery-orders/{pk}/agent-status/"""
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        agent = self._delivery_agent(request)
        try:
            order = self._service.update_status_by_agent(
                delivery_agent_id=agent.id if agent else None,
                order_id=pk,
                new_status=serializer.validated_data["status"],
                notes=serializer.validated_data["notes"],
            )
        except DeliveryOrderError as exc:
            return error_response(exc)

        return Response(DeliveryOrderSerializer(self._service.get_order(order.id)).data)

    # ------------------------------------------------------------------
    # Assignment
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def assign(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/delivery-orders/{pk}/assign/

        The calling delivery agent takes the order.
        """
        agent = self._delivery_agent(request)
        agent_id = agent.id if agent else None
        try:
            order = self._service.assign_delivery_agent(pk, agent_id)
        except DeliveryOrderError as exc:
            logger.error(
                "delivery_order.assignment_failed",
                order_id=pk,
                delivery_agent_id=agent_id,
                error=str(exc),
                kind=str(exc.kind),
            )
            return error_response(exc)

        # A deleted order can be assigned but is not served back.
        if order.is_deleted:
            return Response(
                {"id": order.id, "status": order.status},
                status=status.HTTP_200_OK,
            )
        return Response(DeliveryOrderSerializer(self._service.get_order(order.id)).data)
