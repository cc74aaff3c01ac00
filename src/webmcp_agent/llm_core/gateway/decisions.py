"""Normalized outcome of one model consultation, independent of the provider wire format."""

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Why a consultation or an exchange failed."""

    TRANSPORT = "transport"
    AUTH = "auth"
    MALFORMED_REPLY = "malformed_reply"
    LOOP_LIMIT = "loop_limit"
    INTERNAL = "internal"


class TextDecision(BaseModel):
    """The model answered in plain text; the exchange is over."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    message: str


class ToolCallDecision(BaseModel):
    """The model asked for one tool call.

    Attributes:
        call_id: Provider token that the tool result must echo.
        name: Requested tool name. Not guaranteed to be registered.
        arguments: Parsed JSON object of arguments, not yet validated.
        raw_arguments: The serialized arguments exactly as received.
        content: Text the model sent alongside the call, if any.
        dropped_calls: Further calls in the same reply that were not acted on.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["tool_call"] = "tool_call"
    call_id: str
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)
    raw_arguments: str = "{}"
    content: Optional[str] = None
    dropped_calls: int = 0


class ErrorDecision(BaseModel):
    """The consultation failed. ``message`` is user-safe; details went to the log."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    error_kind: ErrorKind
    message: str


Decision = Annotated[Union[TextDecision, ToolCallDecision, ErrorDecision], Field(discriminator="kind")]
