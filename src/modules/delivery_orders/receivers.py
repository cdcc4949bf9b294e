"""Receiver resolution at order-creation time.

A receiver is either a registered account (its own name and phone win
over whatever the sender typed) or a guest described only by the
free-text contact the sender supplied.  A receiver id that does not
resolve is a guest, not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import structlog

from modules.delivery_orders.value_objects import ReceiverInfo

if TYPE_CHECKING:
    from modules.accounts.models import Account
    from modules.accounts.repositories.interfaces import IAccountRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReceiverResolution:
    receiver_info: ReceiverInfo
    account: Optional[Account] = None

    @property
    def is_guest(self) -> bool:
        return self.account is None


class ReceiverResolver:
    """Builds the canonical receiver record for a new order."""

    def __init__(self, account_repository: IAccountRepository) -> None:
        self._account_repo = account_repository

    def resolve(
        self,
        receiver_account_id: Any,
        fallback_name: str = "",
        fallback_phone_number: str = "",
    ) -> ReceiverResolution:
        account = self._account_repo.get_by_id(receiver_account_id)
        if account is not None:
            logger.info("receiver.resolved_account", receiver_account_id=str(account.id))
            return ReceiverResolution(
                receiver_info=ReceiverInfo(account.name, account.phone_number),
                account=account,
            )

        if receiver_account_id:
            logger.info(
                "receiver.unresolved_id",
                receiver_account_id=str(receiver_account_id),
            )
        return ReceiverResolution(
            receiver_info=ReceiverInfo(fallback_name or "", fallback_phone_number or "")
        )
