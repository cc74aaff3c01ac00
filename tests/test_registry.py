import pytest
from typing import Annotated, Any, Dict
from pydantic import Field

from webmcp_agent.llm_core import SchemaTool, ToolRegistry, ToolResult
from webmcp_agent.llm_core.exceptions import ToolRegistrationError, ToolValidationError


async def _ok(arguments: Dict[str, Any]) -> ToolResult:
    return ToolResult(success=True)


def _tool(name: str) -> SchemaTool:
    return SchemaTool(name=name, description=f"{name} description.", input_schema={"type": "object"}, executor=_ok)


def test_register_keeps_order() -> None:
    registry = ToolRegistry()
    registry.register([_tool("b"), _tool("a"), _tool("c")])

    assert registry.names() == ["b", "a", "c"]
    assert [tool.name for tool in registry] == ["b", "a", "c"]
    assert len(registry) == 3
    assert "a" in registry


def test_register_replaces_entire_set() -> None:
    registry = ToolRegistry([_tool("old_one"), _tool("old_two")])

    registry.register([_tool("new_one")])

    assert registry.names() == ["new_one"]
    assert registry.get("old_one") is None
    assert "old_two" not in registry


def test_register_empty_batch_clears_tools() -> None:
    registry = ToolRegistry([_tool("x")])
    registry.register([])
    assert len(registry) == 0
    assert registry.list() == []


def test_duplicate_names_rejected_and_previous_set_kept() -> None:
    registry = ToolRegistry([_tool("keep")])

    with pytest.raises(ToolRegistrationError, match="registered twice"):
        registry.register([_tool("dup"), _tool("dup")])

    assert registry.names() == ["keep"]


def test_non_tool_entry_rejected() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolRegistrationError, match="expected a Tool"):
        registry.register([{"name": "raw", "description": "dict", "executor": _ok}])  # type: ignore[list-item]
    assert len(registry) == 0


def test_list_returns_copy() -> None:
    registry = ToolRegistry([_tool("a")])
    tools = registry.list()
    tools.append(_tool("b"))
    assert registry.names() == ["a"]


def test_register_functions() -> None:
    registry = ToolRegistry()

    def double(x: Annotated[int, Field(description="An integer")]) -> int:
        """Doubles a number."""
        return x * 2

    def greet(name: Annotated[str, Field(description="Who to greet")]) -> str:
        """Greets someone."""
        return f"Hello {name}"

    registry.register_functions(double, greet)

    assert registry.names() == ["double", "greet"]
    assert registry.get("double").description == "Doubles a number."  # type: ignore[union-attr]


def test_register_functions_requires_docstring() -> None:
    registry = ToolRegistry()

    def undocumented(x: Annotated[int, Field(description="An integer")]) -> int:
        return x

    with pytest.raises(ToolValidationError, match="missing docstring"):
        registry.register_functions(undocumented)
