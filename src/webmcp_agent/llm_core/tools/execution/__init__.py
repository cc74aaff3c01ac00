"""Tool execution and its audit trail."""

from .event_log import ToolEvent, ToolEventLog
from .tool_invoker import ToolInvoker, EXECUTOR_FAILURE_MESSAGE

__all__ = ["ToolEvent", "ToolEventLog", "ToolInvoker", "EXECUTOR_FAILURE_MESSAGE"]
