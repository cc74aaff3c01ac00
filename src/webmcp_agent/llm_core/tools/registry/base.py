"""Tool registry holding the active set of tools."""

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from ..models import FunctionTool, Tool
from ...exceptions import ToolRegistrationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    A registry of the tools currently offered to the model.

    The active set is replaced as a whole by ``register``. Readers always see
    either the previous set or the new one, never a mix, because the new mapping
    is built aside and swapped in with a single assignment.
    """

    def __init__(self, tools: Optional[Iterable[Tool]] = None) -> None:
        """Initialize the ToolRegistry.

        Args:
            tools: Optional initial batch, registered as if passed to ``register``.
        """
        self._tools: Mapping[str, Tool] = MappingProxyType({})
        if tools is not None:
            self.register(tools)

    def register(self, tools: Iterable[Tool]) -> None:
        """
        Replace the entire active tool set.

        Args:
            tools: The complete new batch. Order is kept and shown to the model.

        Raises:
            ToolRegistrationError: If an entry is not a Tool or two tools share a name.
                The previous set stays active in that case.
        """
        staged: Dict[str, Tool] = {}
        for tool in tools:
            if not isinstance(tool, Tool):
                msg = f"Cannot register {tool!r}: expected a Tool, got {type(tool).__name__}."
                logger.error(msg)
                raise ToolRegistrationError(msg)
            if tool.name in staged:
                msg = f"Tool '{tool.name}' is registered twice in the same batch."
                logger.error(msg)
                raise ToolRegistrationError(msg)
            staged[tool.name] = tool

        previous = set(self._tools)
        self._tools = MappingProxyType(staged)

        dropped = previous - set(staged)
        logger.info(f"Registered {len(staged)} tool(s): {', '.join(staged) or '-'}")
        if dropped:
            logger.debug("Tools no longer available: %s", ", ".join(sorted(dropped)))

    def register_functions(self, *funcs: Callable[..., Any]) -> None:
        """Replace the active set with tools generated from documented functions.

        Raises:
            ToolValidationError: If a function is missing docstrings or parameter descriptions.
            ToolRegistrationError: If two functions share a name.
        """
        self.register([FunctionTool.from_callable(func) for func in funcs])

    def get(self, name: str) -> Optional[Tool]:
        """Return the tool registered under ``name``, or None."""
        return self._tools.get(name)

    def list(self) -> List[Tool]:
        """Return the active tools in registration order."""
        return list(self._tools.values())

    def names(self) -> List[str]:
        """Return the active tool names in registration order."""
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self.list())
