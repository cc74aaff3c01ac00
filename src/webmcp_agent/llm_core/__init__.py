"""Public exports for the provider-agnostic orchestration core."""

from .config import AgentSettings, DEFAULT_SYSTEM_INSTRUCTION
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
from .logger import get_logger, setup_logging
from .messages import BaseTurn, UserTurn, AssistantTurn, ToolResultTurn, Turn, ConversationState
from .tools import (
    Tool,
    SchemaTool,
    FunctionTool,
    ToolCallRequest,
    ToolCallResult,
    ToolResult,
    ToolRegistry,
    ToolEvent,
    ToolEventLog,
    ToolInvoker,
)
from .gateway import (
    ModelGateway,
    Decision,
    TextDecision,
    ToolCallDecision,
    ErrorDecision,
    ErrorKind,
    GENERIC_FAILURE_MESSAGE,
    AUTH_GUIDANCE_MESSAGE,
)
from .orchestrator import (
    Orchestrator,
    OrchestratorState,
    Transition,
    ExchangeOutcome,
    ExchangeResult,
    ReplySink,
)

__all__ = [
    "AgentSettings",
    "DEFAULT_SYSTEM_INSTRUCTION",
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
    "get_logger",
    "setup_logging",
    "BaseTurn",
    "UserTurn",
    "AssistantTurn",
    "ToolResultTurn",
    "Turn",
    "ConversationState",
    "Tool",
    "SchemaTool",
    "FunctionTool",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolResult",
    "ToolRegistry",
    "ToolEvent",
    "ToolEventLog",
    "ToolInvoker",
    "ModelGateway",
    "Decision",
    "TextDecision",
    "ToolCallDecision",
    "ErrorDecision",
    "ErrorKind",
    "GENERIC_FAILURE_MESSAGE",
    "AUTH_GUIDANCE_MESSAGE",
    "Orchestrator",
    "OrchestratorState",
    "Transition",
    "ExchangeOutcome",
    "ExchangeResult",
    "ReplySink",
]
