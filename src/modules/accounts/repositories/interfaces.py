"""Identity lookup contracts.

The delivery order services resolve senders, receivers and delivery agents
exclusively through these interfaces.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import Account, DeliveryAgent


class IAccountRepository(IRepository["Account"]):
    """Repository contract for registered accounts."""

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[Account]:
        """Return the account for *id*, or ``None`` when it does not resolve."""

    @abstractmethod
    def get_by_user_id(self, user_id: Any) -> Optional[Account]:
        """Return the account linked to a login user, if any."""


class IDeliveryAgentRepository(IRepository["DeliveryAgent"]):
    """Repository contract for delivery agents."""

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[DeliveryAgent]:
        """Return the agent for *id*, or ``None`` when it does not resolve."""

    @abstractmethod
    def get_by_account_id(self, account_id: Any) -> Optional[DeliveryAgent]:
        """Return the courier profile of an account, if any."""
