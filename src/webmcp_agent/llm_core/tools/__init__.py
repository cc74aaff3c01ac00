from .models import Tool, SchemaTool, FunctionTool, ToolCallRequest, ToolCallResult, ToolResult
from .registry import ToolRegistry
from .execution import ToolEvent, ToolEventLog, ToolInvoker
from .schema import SchemaValidator, SchemaModelFactory

__all__ = [
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
    "SchemaValidator",
    "SchemaModelFactory",
]
