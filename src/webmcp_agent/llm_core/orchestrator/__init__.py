"""The orchestration state machine."""

from .orchestrator import Orchestrator
from .states import OrchestratorState, Transition, ExchangeOutcome, ExchangeResult, ReplySink

__all__ = [
    "Orchestrator",
    "OrchestratorState",
    "Transition",
    "ExchangeOutcome",
    "ExchangeResult",
    "ReplySink",
]
