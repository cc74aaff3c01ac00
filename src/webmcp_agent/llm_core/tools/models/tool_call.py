"""Data models for tool execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Mapping

from pydantic import BaseModel, ConfigDict

from ...exceptions import ExecutorError


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a structured tool call request as the model sent it.

    ``raw_arguments`` is untrusted serialized input. It is kept verbatim so the
    assistant turn can be replayed to the provider exactly as received.
    """

    call_id: str
    name: str
    raw_arguments: str = "{}"


class ToolResult(BaseModel):
    """Success/failure envelope produced by a tool executor.

    Only ``success`` is shared across tools. Every other key is free-form payload
    and is preserved as given.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    success: bool

    @classmethod
    def failure(cls, message: str, **extra: Any) -> "ToolResult":
        """Build a failed result with a user-safe message."""
        return cls(success=False, message=message, **extra)

    @classmethod
    def coerce(cls, value: Any) -> "ToolResult":
        """Turn an executor return value into a ToolResult.

        Args:
            value: A ToolResult or a mapping carrying a boolean ``success`` key.

        Returns:
            The normalized result.

        Raises:
            ExecutorError: If the value is not a success/failure envelope.
        """
        if isinstance(value, ToolResult):
            return value
        if isinstance(value, Mapping) and isinstance(value.get("success"), bool):
            return cls(**dict(value))
        raise ExecutorError(f"Executor returned {type(value).__name__} instead of a success/failure envelope.")

    def payload(self) -> Dict[str, Any]:
        """Return the result as a plain dictionary, exactly as the model will see it."""
        return self.model_dump()


ToolOutcome = Literal["executed", "unknown_tool", "invalid_arguments", "executor_error"]


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of handling one tool call request."""

    call_id: str
    name: str
    arguments: Dict[str, Any]
    result: ToolResult
    outcome: ToolOutcome
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    duration_ms: float = 0.0
