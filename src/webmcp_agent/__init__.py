"""WebMCP agent - a tool-calling orchestration engine with a demo financial tool set."""

from .agent import Agent, build_agent
from .llm_core import (
    AgentSettings,
    ConversationState,
    ExchangeOutcome,
    ExchangeResult,
    FunctionTool,
    ModelGateway,
    Orchestrator,
    OrchestratorState,
    SchemaTool,
    Tool,
    ToolEventLog,
    ToolRegistry,
    ToolResult,
)
from .llm_impl import MockGateway, OpenAIGateway, create_gateway

__all__ = [
    "Agent",
    "build_agent",
    "AgentSettings",
    "ConversationState",
    "ExchangeOutcome",
    "ExchangeResult",
    "FunctionTool",
    "ModelGateway",
    "Orchestrator",
    "OrchestratorState",
    "SchemaTool",
    "Tool",
    "ToolEventLog",
    "ToolRegistry",
    "ToolResult",
    "MockGateway",
    "OpenAIGateway",
    "create_gateway",
]
