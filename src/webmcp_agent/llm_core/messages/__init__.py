"""Expose provider-agnostic turn models and the conversation state."""

from .models import BaseTurn, UserTurn, AssistantTurn, ToolResultTurn, Turn, last_user_turn
from .conversation import ConversationState

__all__ = [
    "BaseTurn",
    "UserTurn",
    "AssistantTurn",
    "ToolResultTurn",
    "Turn",
    "last_user_turn",
    "ConversationState",
]
