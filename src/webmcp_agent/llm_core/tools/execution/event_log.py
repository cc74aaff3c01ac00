"""Structured audit trail of tool invocations."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ..models import ToolCallResult, ToolOutcome
from ...logger import get_logger

logger = get_logger(__name__)


class ToolEvent(BaseModel):
    """One handled tool call.

    Attributes:
        call_id: Provider token identifying the call.
        name: Requested tool name, registered or not.
        arguments: Arguments as validated, or as parsed when validation failed.
        result: Payload that was fed back to the model.
        outcome: How the call ended.
        success: The ``success`` flag of the result.
        timestamp: When handling started (UTC).
        duration_ms: Wall time spent validating and executing.
    """

    model_config = ConfigDict(frozen=True)

    call_id: str
    name: str
    arguments: Dict[str, Any]
    result: Dict[str, Any]
    outcome: ToolOutcome
    success: bool
    timestamp: datetime
    duration_ms: float


class ToolEventLog:
    """Append-only, queryable log of tool events.

    Optionally bounded: when ``max_events`` is set the oldest events are
    discarded first.
    """

    def __init__(self, max_events: Optional[int] = None) -> None:
        self._events: List[ToolEvent] = []
        self._max_events = max_events

    def record(self, call: ToolCallResult) -> ToolEvent:
        """Record a handled tool call and return the stored event."""
        event = ToolEvent(
            call_id=call.call_id,
            name=call.name,
            arguments=dict(call.arguments),
            result=call.result.payload(),
            outcome=call.outcome,
            success=call.result.success,
            timestamp=call.started_at,
            duration_ms=call.duration_ms,
        )
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            del self._events[: len(self._events) - self._max_events]

        logger.info(
            "tool=%s call_id=%s outcome=%s success=%s duration_ms=%.1f",
            event.name,
            event.call_id,
            event.outcome,
            event.success,
            event.duration_ms,
        )
        return event

    def query(
        self,
        name: Optional[str] = None,
        outcome: Optional[ToolOutcome] = None,
        success: Optional[bool] = None,
        since: Optional[datetime] = None,
    ) -> List[ToolEvent]:
        """Return events matching every given filter, oldest first."""
        return [
            event
            for event in self._events
            if (name is None or event.name == name)
            and (outcome is None or event.outcome == outcome)
            and (success is None or event.success == success)
            and (since is None or event.timestamp >= since)
        ]

    def last(self) -> Optional[ToolEvent]:
        return self._events[-1] if self._events else None

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
