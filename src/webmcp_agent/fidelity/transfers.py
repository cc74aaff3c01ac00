"""Staging and user confirmation of fund transfers.

The model can only reach ``TransferDesk.stage`` (through the staging tool).
``confirm`` and ``cancel`` are called by the user interface in response to an
explicit user action, never from inside the orchestration loop.
"""

import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from webmcp_agent.llm_core.exceptions import TransferError
from webmcp_agent.llm_core.logger import get_logger
from .accounts import Account, AccountBook

logger = get_logger(__name__)


class TransferStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class StagedTransfer(BaseModel):
    """A transfer proposal awaiting the user's decision."""

    model_config = ConfigDict(frozen=True)

    proposal_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    from_account_id: str
    from_account_name: str
    to_account_id: str
    to_account_name: str
    amount: float
    status: TransferStatus = TransferStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TransferDesk:
    """Keeps staged transfers and commits them on user confirmation."""

    def __init__(self, book: AccountBook) -> None:
        self.book = book
        self._proposals: Dict[str, StagedTransfer] = {}

    def stage(self, source: Account, target: Account, amount: float) -> StagedTransfer:
        """Record a new pending proposal. Balances are not touched.

        Raises:
            TransferError: If the amount is not a positive cent value or both sides are the same account.
        """
        if not math.isfinite(amount):
            raise TransferError("The transfer amount must be a finite number.")
        amount = round(amount, 2)
        if amount <= 0:
            raise TransferError("The transfer amount must be greater than zero.")
        if source.id == target.id:
            raise TransferError("The source and destination accounts must differ.")

        proposal = StagedTransfer(
            from_account_id=source.id,
            from_account_name=source.name,
            to_account_id=target.id,
            to_account_name=target.name,
            amount=amount,
        )
        self._proposals[proposal.proposal_id] = proposal
        logger.info(
            f"Staged transfer {proposal.proposal_id}: {proposal.amount:.2f} "
            f"from '{source.name}' to '{target.name}' (awaiting confirmation)."
        )
        return proposal

    def confirm(self, proposal_id: str) -> StagedTransfer:
        """Commit a pending proposal.

        Raises:
            TransferError: If the proposal is unknown, no longer pending, or cannot be funded.
        """
        proposal = self._require_pending(proposal_id)
        self.book.apply_transfer(proposal.from_account_id, proposal.to_account_id, proposal.amount)
        confirmed = proposal.model_copy(update={"status": TransferStatus.CONFIRMED})
        self._proposals[proposal_id] = confirmed
        logger.info(f"Transfer {proposal_id} confirmed by the user.")
        return confirmed

    def cancel(self, proposal_id: str) -> StagedTransfer:
        """Discard a pending proposal.

        Raises:
            TransferError: If the proposal is unknown or no longer pending.
        """
        proposal = self._require_pending(proposal_id)
        cancelled = proposal.model_copy(update={"status": TransferStatus.CANCELLED})
        self._proposals[proposal_id] = cancelled
        logger.info(f"Transfer {proposal_id} cancelled by the user.")
        return cancelled

    def get(self, proposal_id: str) -> Optional[StagedTransfer]:
        return self._proposals.get(proposal_id)

    def pending(self) -> List[StagedTransfer]:
        return [p for p in self._proposals.values() if p.status is TransferStatus.PENDING]

    def _require_pending(self, proposal_id: str) -> StagedTransfer:
        proposal = self._proposals.get(proposal_id)
        if proposal is None:
            raise TransferError(f"No staged transfer with id '{proposal_id}'.")
        if proposal.status is not TransferStatus.PENDING:
            raise TransferError(f"Transfer '{proposal_id}' is already {proposal.status.value}.")
        return proposal
