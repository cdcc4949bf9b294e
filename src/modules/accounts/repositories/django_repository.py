"""Django ORM implementations of the identity lookup repositories.

Lookups follow the Null Object pattern: a missing, empty or malformed
identifier (e.g. a non-UUID string for an account) yields ``None``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.accounts.models import Account, DeliveryAgent
from modules.accounts.repositories.interfaces import (
    IAccountRepository,
    IDeliveryAgentRepository,
)

logger = structlog.get_logger(__name__)

_BAD_ID_ERRORS = (ValueError, TypeError, ValidationError)


class AccountDjangoRepository(IAccountRepository):
    """Concrete Account repository backed by Django ORM."""

    def get_by_id(self, id: Any) -> Optional[Account]:
        if id in (None, ""):
            return None
        try:
            return Account.objects.filter(id=id).first()
        except _BAD_ID_ERRORS:
            return None

    def get_by_user_id(self, user_id: Any) -> Optional[Account]:
        if user_id is None:
            return None
        return Account.objects.filter(user_id=user_id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Account.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Account) -> Account:
        is_new = entity._state.adding
        entity.save()
        logger.info("account.saved", account_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        account = self.get_by_id(id)
        if not account:
            return False
        account.delete()
        logger.info("account.deleted", account_id=str(id))
        return True


class DeliveryAgentDjangoRepository(IDeliveryAgentRepository):
    """Concrete DeliveryAgent repository backed by Django ORM."""

    def get_by_id(self, id: Any) -> Optional[DeliveryAgent]:
        if id in (None, ""):
            return None
        try:
            return DeliveryAgent.objects.select_related("account").filter(id=id).first()
        except _BAD_ID_ERRORS:
            return None

    def get_by_account_id(self, account_id: Any) -> Optional[DeliveryAgent]:
        if account_id is None:
            return None
        try:
            return (
                DeliveryAgent.objects.select_related("account")
                .filter(account_id=account_id)
                .first()
            )
        except _BAD_ID_ERRORS:
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = DeliveryAgent.objects.select_related("account")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: DeliveryAgent) -> DeliveryAgent:
        is_new = entity._state.adding
        entity.save()
        logger.info("delivery_agent.saved", delivery_agent_id=entity.id, is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        agent = self.get_by_id(id)
        if not agent:
            return False
        agent.delete()
        logger.info("delivery_agent.deleted", delivery_agent_id=id)
        return True
