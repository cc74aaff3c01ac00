"""Tool-related data models."""

from .models import Tool, SchemaTool, FunctionTool, Executor
from .tool_call import ToolCallRequest, ToolCallResult, ToolResult, ToolOutcome

__all__ = [
    "Tool",
    "SchemaTool",
    "FunctionTool",
    "Executor",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolResult",
    "ToolOutcome",
]
