"""Account repositories package."""

from modules.accounts.repositories.django_repository import (
    AccountDjangoRepository,
    DeliveryAgentDjangoRepository,
)
from modules.accounts.repositories.interfaces import (
    IAccountRepository,
    IDeliveryAgentRepository,
)

__all__ = [
    "AccountDjangoRepository",
    "DeliveryAgentDjangoRepository",
    "IAccountRepository",
    "IDeliveryAgentRepository",
]
