"""The closed set of tool variants the registry accepts."""

import asyncio
import copy
import inspect
import re
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type, cast

import jsonref  # type: ignore
from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from ...exceptions import ToolValidationError
from ...logger import get_logger
from ..schema import SchemaModelFactory, SchemaValidator, ToolParameterFactory
from .tool_call import ToolResult

logger = get_logger(__name__)

_TOOL_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

Executor = Callable[[Dict[str, Any]], Awaitable[Any]]


class Tool(ABC):
    """
    A named, schema-described capability the orchestrator can invoke for the model.

    Tools are immutable once constructed. The engine only ever calls
    ``describe``, ``validate`` and ``execute``; it never inspects the executor.
    """

    def __init__(self, name: str, description: str) -> None:
        """Initialize the common tool identity.

        Args:
            name: Unique, stable identifier shown to the model.
            description: What the tool does, shown to the model.

        Raises:
            ToolValidationError: If the name or description is unusable.
        """
        if not isinstance(name, str) or not _TOOL_NAME_PATTERN.match(name):
            msg = f"Invalid tool name {name!r}. Use 1-64 letters, digits, '_' or '-'."
            logger.error(msg)
            raise ToolValidationError(msg)
        if not isinstance(description, str) or not description.strip():
            msg = f"Tool '{name}' needs a description. The model relies on it to choose tools."
            logger.error(msg)
            raise ToolValidationError(msg)
        self._name = name
        self._description = description.strip()

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """Return the JSON input schema that is sent to the provider verbatim."""
        pass

    @abstractmethod
    def validate(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate parsed call arguments.

        Raises:
            ToolValidationError: If the arguments do not match the input schema.
        """
        pass

    @abstractmethod
    async def execute(self, arguments: Dict[str, Any]) -> ToolResult:
        """Run the tool with validated arguments."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"


class SchemaTool(Tool):
    """A tool declared with an explicit input schema and an async executor.

    The executor receives the validated arguments as one dictionary and must
    return a ToolResult or a mapping with a boolean ``success`` key.
    """

    def __init__(self, name: str, description: str, input_schema: Dict[str, Any], executor: Executor) -> None:
        """Initialize the schema tool.

        Args:
            name: Unique tool name.
            description: Description shown to the model.
            input_schema: JSON-Schema-like object describing the arguments.
            executor: Async callable taking the argument dictionary.

        Raises:
            ToolValidationError: If the schema is not an object schema or the executor is not callable.
        """
        super().__init__(name, description)
        if not callable(executor):
            msg = f"Executor of tool '{name}' is not callable."
            logger.error(msg)
            raise ToolValidationError(msg)
        SchemaValidator.assert_object_schema(input_schema, name)
        self._input_schema = copy.deepcopy(input_schema)
        self._executor = executor
        self._args_model = SchemaModelFactory.build(name, self._input_schema)

    @classmethod
    def from_mapping(cls, registration: Mapping[str, Any]) -> "SchemaTool":
        """Build a tool from the ``{name, description, inputSchema, executor}`` registration shape.

        Raises:
            ToolValidationError: If a key is missing.
        """
        try:
            return cls(
                name=registration["name"],
                description=registration["description"],
                input_schema=registration.get("inputSchema") or {"type": "object", "properties": {}},
                executor=registration["executor"],
            )
        except KeyError as e:
            msg = f"Tool registration is missing the key {e.args[0]!r}."
            logger.error(msg)
            raise ToolValidationError(msg) from e

    def describe(self) -> Dict[str, Any]:
        return copy.deepcopy(self._input_schema)

    def validate(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            instance = self._args_model.model_validate(dict(arguments))
        except ValidationError as e:
            raise ToolValidationError(f"Argument validation failed for '{self.name}': {e}") from e
        return SchemaModelFactory.dump(instance)

    async def execute(self, arguments: Dict[str, Any]) -> ToolResult:
        result = await self._executor(arguments)
        return ToolResult.coerce(result)


class FunctionTool(Tool):
    """A tool generated from a documented Python function.

    Every parameter must be annotated as ``Annotated[Type, Field(description=...)]``.
    The docstring becomes the description. Plain return values are wrapped as
    ``{"success": True, "result": value}``; sync functions run in a worker thread.
    """

    def __init__(
        self,
        name: str,
        description: str,
        func: Callable[..., Any],
        parameters: Dict[str, Any],
        args_model: Type[BaseModel],
    ) -> None:
        super().__init__(name, description)
        self._func = func
        self._parameters = parameters
        self._args_model = args_model

    @classmethod
    def from_callable(
        cls, func: Callable[..., Any], name: Optional[str] = None, description: Optional[str] = None
    ) -> "FunctionTool":
        """Generate a tool from a callable function.

        Args:
            func: The function to wrap.
            name: Optional name override for the tool.
            description: Optional description override for the tool.

        Returns:
            The generated tool.

        Raises:
            ToolValidationError: If the function is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if description is None:
            description = cls._get_docstring_from_func(func, tool_name)

        fields = ToolParameterFactory.build_fields(func, tool_name)
        args_model = create_model(
            f"{tool_name}Params",
            __config__=ConfigDict(extra="forbid"),
            **cast(Dict[str, Any], fields),
        )
        raw_schema = args_model.model_json_schema()
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # proxies=False gives a plain dict back, not JsonRef objects
        parameters = jsonref.replace_refs(raw_schema, proxies=False)
        parameters = SchemaValidator.sanitize_schema(parameters)
        parameters.setdefault("properties", {})

        return cls(name=tool_name, description=description, func=func, parameters=parameters, args_model=args_model)

    @staticmethod
    def _get_docstring_from_func(func: Callable[..., Any], tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. LLMs need a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    def describe(self) -> Dict[str, Any]:
        return copy.deepcopy(self._parameters)

    def validate(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            instance = self._args_model.model_validate(dict(arguments))
        except ValidationError as e:
            raise ToolValidationError(f"Argument validation failed for '{self.name}': {e}") from e
        return {field_name: getattr(instance, field_name) for field_name in type(instance).model_fields}

    async def execute(self, arguments: Dict[str, Any]) -> ToolResult:
        if inspect.iscoroutinefunction(self._func):
            value = await self._func(**arguments)
        else:
            value = await asyncio.to_thread(self._func, **arguments)

        if isinstance(value, ToolResult) or (isinstance(value, Mapping) and "success" in value):
            return ToolResult.coerce(value)
        return ToolResult(success=True, result=value)
