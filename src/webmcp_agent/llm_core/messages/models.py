"""Provider-agnostic turn models for the conversation history."""

from typing import Any, Dict, List, Literal, Optional, Reversible, Union

from pydantic import BaseModel, ConfigDict, Field

from ..tools.models import ToolCallRequest


class BaseTurn(BaseModel):
    """Base model for one atomic entry in the conversation history.

    Attributes:
        author: Role associated with the turn.
    """

    model_config = ConfigDict(frozen=True)

    author: str


class UserTurn(BaseTurn):
    """Text authored by the end user."""

    author: Literal["user"] = "user"
    content: str


class AssistantTurn(BaseTurn):
    """Output of the model: text, tool call requests, or both."""

    author: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    tool_calls: List[ToolCallRequest] = Field(default_factory=list)

    @property
    def call_ids(self) -> List[str]:
        return [call.call_id for call in self.tool_calls]


class ToolResultTurn(BaseTurn):
    """Result of one tool call, fed back to the model verbatim."""

    author: Literal["tool"] = "tool"
    call_id: str
    name: str
    payload: Dict[str, Any]


Turn = Union[UserTurn, AssistantTurn, ToolResultTurn]


def last_user_turn(turns: Reversible[Turn]) -> Optional[UserTurn]:
    """Return the most recent user turn in ``turns``, or None."""
    return next((turn for turn in reversed(turns) if isinstance(turn, UserTurn)), None)
