"""Export the exception hierarchy used across the gateway, tools and orchestrator."""

from .exceptions import (
    AgentError,
    ConfigurationError,
    GatewayError,
    TransportError,
    AuthError,
    MalformedReplyError,
    LLMToolError,
    ToolRegistrationError,
    ToolValidationError,
    UnknownToolError,
    ExecutorError,
    ConversationError,
    ExchangeInProgressError,
    TransferError,
)

__all__ = [
    "AgentError",
    "ConfigurationError",
    "GatewayError",
    "TransportError",
    "AuthError",
    "MalformedReplyError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolValidationError",
    "UnknownToolError",
    "ExecutorError",
    "ConversationError",
    "ExchangeInProgressError",
    "TransferError",
]
