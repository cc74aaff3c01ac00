"""Resolve, validate and run a single tool call."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ...exceptions import ExecutorError, ToolValidationError, UnknownToolError
from ...logger import get_logger
from ..models import ToolCallResult, ToolOutcome, ToolResult
from ..registry import ToolRegistry
from .event_log import ToolEventLog

logger = get_logger(__name__)

EXECUTOR_FAILURE_MESSAGE = "An internal error occurred."


class ToolInvoker:
    """Runs tool calls against a registry, one at a time.

    Whatever happens inside a tool (unknown name, bad arguments, an exception,
    a timeout) ends up as a failed ToolResult that can be handed back to the
    model. Only cancellation propagates.
    """

    def __init__(
        self,
        *,
        registry: ToolRegistry,
        event_log: Optional[ToolEventLog] = None,
        tool_timeout: float = 30.0,
    ) -> None:
        """Initialize the invoker.

        Args:
            registry: Tool registry used to resolve tool names.
            event_log: Audit log receiving one event per call.
            tool_timeout: Timeout in seconds for a single executor.
        """
        self.registry = registry
        self.event_log = event_log if event_log is not None else ToolEventLog()
        self._tool_timeout = tool_timeout

    async def invoke(self, call_id: str, name: str, arguments: Dict[str, Any]) -> ToolCallResult:
        """Handle a single tool call request.

        Args:
            call_id: Provider token identifying the call.
            name: Requested tool name.
            arguments: Parsed, not yet validated, arguments.

        Returns:
            The call outcome, already recorded in the event log.
        """
        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()
        logger.debug(f"Handling tool call: {name} (ID: {call_id})")

        outcome: ToolOutcome
        used_arguments = dict(arguments)
        try:
            tool = self.registry.get(name)
            if tool is None:
                raise UnknownToolError(f"Unknown capability '{name}'.")

            try:
                used_arguments = tool.validate(arguments)
            except ToolValidationError as exc:
                logger.warning(f"Validation error for '{name}': {exc}")
                result = ToolResult.failure(str(exc), error="invalid_arguments")
                outcome = "invalid_arguments"
            else:
                result = await self._execute(tool.execute(used_arguments), name)
                outcome = "executed"
        except UnknownToolError as exc:
            logger.warning(f"{exc} Registered tools: {', '.join(self.registry.names()) or '-'}")
            result = ToolResult.failure(
                f"{exc} Available tools: {', '.join(self.registry.names()) or 'none'}.",
                error="unknown_tool",
            )
            outcome = "unknown_tool"
        except ExecutorError as exc:
            logger.warning(f"Executor error in '{name}': {exc}")
            result = ToolResult.failure(EXECUTOR_FAILURE_MESSAGE, error="executor_error")
            outcome = "executor_error"

        call = ToolCallResult(
            call_id=call_id,
            name=name,
            arguments=used_arguments,
            result=result,
            outcome=outcome,
            started_at=started_at,
            duration_ms=(time.perf_counter() - start) * 1000.0,
        )
        self.event_log.record(call)
        return call

    async def _execute(self, pending: Any, name: str) -> ToolResult:
        """Await an executor with the configured timeout.

        Raises:
            ExecutorError: If the executor raises, times out, or returns something
                that is not a success/failure envelope.
        """
        logger.info(f"Executing tool '{name}'...")
        try:
            result = await asyncio.wait_for(pending, timeout=self._tool_timeout)
        except asyncio.TimeoutError as exc:
            raise ExecutorError(f"Tool '{name}' timed out after {self._tool_timeout} seconds.") from exc
        except ExecutorError:
            raise
        except Exception as exc:
            logger.error(f"Tool '{name}' raised {type(exc).__name__}: {exc}", exc_info=True)
            raise ExecutorError(f"Tool '{name}' raised {type(exc).__name__}.") from exc

        if not isinstance(result, ToolResult):
            raise ExecutorError(f"Tool '{name}' returned {type(result).__name__} instead of a ToolResult.")
        logger.info(f"Tool '{name}' finished (success={result.success}).")
        return result
