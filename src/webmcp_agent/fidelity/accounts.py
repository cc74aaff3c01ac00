"""In-memory account book backing the demo tools."""

import math
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from webmcp_agent.llm_core.exceptions import TransferError
from webmcp_agent.llm_core.logger import get_logger

logger = get_logger(__name__)


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    balance: float
    type: str


def default_accounts() -> List[Account]:
    """The sample accounts shown on the demo dashboard."""
    return [
        Account(id="acc_brokerage_123", name="Brokerage Account", balance=15430.25, type="taxable"),
        Account(id="acc_roth_456", name="Roth IRA", balance=89500.75, type="retirement"),
        Account(id="acc_401k_789", name="401(k) Rollover", balance=245100.40, type="retirement"),
        Account(id="acc_cash_101", name="Cash Management", balance=5200.00, type="cash"),
    ]


class AccountBook:
    """Holds the user's accounts. Balances change only through ``apply_transfer``."""

    def __init__(self, accounts: Optional[Iterable[Account]] = None) -> None:
        self._accounts: Dict[str, Account] = {
            account.id: account for account in (accounts if accounts is not None else default_accounts())
        }

    def list(self) -> List[Account]:
        return list(self._accounts.values())

    def get(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def find(self, identifier: str) -> Optional[Account]:
        """Return the first account whose name contains ``identifier``, ignoring case."""
        needle = identifier.strip().lower()
        if not needle:
            return None
        for account in self._accounts.values():
            if needle in account.name.lower():
                logger.debug("Matched '%s' to account '%s'.", identifier, account.name)
                return account
        logger.debug("No account matches '%s'.", identifier)
        return None

    def apply_transfer(self, from_id: str, to_id: str, amount: float) -> None:
        """Move ``amount`` between two accounts.

        Raises:
            TransferError: If an account is unknown, the amount is not a positive finite number,
                or the source lacks funds.
        """
        if not math.isfinite(amount) or amount <= 0:
            raise TransferError(f"Refusing to move a non-positive or non-finite amount ({amount!r}).")
        source = self._accounts.get(from_id)
        target = self._accounts.get(to_id)
        if source is None or target is None:
            raise TransferError(f"Unknown account in transfer {from_id} -> {to_id}.")
        if source.balance < amount:
            raise TransferError(f"Insufficient funds in '{source.name}' for a transfer of {amount:.2f}.")

        self._accounts[from_id] = source.model_copy(update={"balance": round(source.balance - amount, 2)})
        self._accounts[to_id] = target.model_copy(update={"balance": round(target.balance + amount, 2)})
        logger.info(f"Moved {amount:.2f} from '{source.name}' to '{target.name}'.")
