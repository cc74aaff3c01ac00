"""States, transitions and results of the orchestrator state machine."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..gateway import ErrorKind
from ..tools import ToolEvent


class OrchestratorState(str, Enum):
    IDLE = "idle"
    AWAITING_MODEL = "awaiting_model"
    EXECUTING_TOOL = "executing_tool"
    ERRORED = "errored"


@dataclass(frozen=True)
class Transition:
    """One recorded state change."""

    source: OrchestratorState
    target: OrchestratorState
    trigger: str
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ExchangeOutcome(str, Enum):
    ANSWERED = "answered"
    ERRORED = "errored"
    CANCELLED = "cancelled"


class ExchangeResult(BaseModel):
    """What one ``submit`` produced.

    Attributes:
        reply: Text surfaced to the user. Empty when the exchange was cancelled.
        outcome: How the exchange ended.
        error_kind: Failure category when ``outcome`` is ERRORED.
        tool_rounds: Tool round-trips completed during the exchange.
        tool_events: Tool events recorded during the exchange, oldest first.
    """

    model_config = ConfigDict(frozen=True)

    reply: str
    outcome: ExchangeOutcome
    error_kind: Optional[ErrorKind] = None
    tool_rounds: int = 0
    tool_events: List[ToolEvent] = Field(default_factory=list)


class ReplySink(Protocol):
    """External UI collaborator that displays the final reply."""

    def show_reply(self, text: str) -> None: ...
