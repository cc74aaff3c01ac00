"""
Custom exception classes for the orchestration engine.

This module defines the hierarchy of exceptions raised while talking to the
model provider, registering and running tools, recording the conversation,
and configuring the agent. Every class carries a message that is safe to log;
none of them is ever shown verbatim to the end user.
"""


class AgentError(Exception):
    """Base exception for all agent errors."""

    pass


class ConfigurationError(AgentError):
    """Raised when the agent settings are invalid or incomplete."""

    pass


class GatewayError(AgentError):
    """Base exception for failures while consulting the model provider."""

    pass


class TransportError(GatewayError):
    """Raised when the provider cannot be reached or answers with a non-2xx status."""

    pass


class AuthError(GatewayError):
    """Raised when the provider credential is missing or rejected."""

    pass


class MalformedReplyError(GatewayError):
    """Raised when the provider reply cannot be parsed into a decision."""

    pass


class LLMToolError(AgentError):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(LLMToolError):
    """Raised when a batch of tools cannot be registered."""

    pass


class ToolValidationError(LLMToolError):
    """Raised when a tool definition or its call arguments are invalid."""

    pass


class UnknownToolError(LLMToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ExecutorError(LLMToolError):
    """Raised when a tool executor fails or returns something that is not a tool result."""

    pass


class ConversationError(AgentError):
    """Raised when a turn would break the ordering rules of the conversation."""

    pass


class ExchangeInProgressError(AgentError):
    """Raised when a message is submitted while another exchange is still running."""

    pass


class TransferError(AgentError):
    """Raised when a staged transfer cannot be confirmed or cancelled."""

    pass
