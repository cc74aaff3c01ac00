import inspect
from typing import Annotated, Any, Callable, Dict, Tuple, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class FieldTuple(BaseModel):
    """One ``(annotation, FieldInfo)`` pair as ``create_model`` expects it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    annotation: Any
    field: FieldInfo

    def as_definition(self) -> Tuple[Any, FieldInfo]:
        return self.annotation, self.field


class ToolParameterFactory:
    """Turns the parameters of a function tool into pydantic field definitions."""

    @classmethod
    def build_fields(cls, func: Callable[..., Any], tool_name: str) -> Dict[str, Tuple[Any, FieldInfo]]:
        """Collect the field definitions for every parameter of ``func``.

        Args:
            func: The function backing the tool.
            tool_name: The name of the tool for error reporting.

        Returns:
            Parameter name to ``(annotation, FieldInfo)``, in signature order.

        Raises:
            ToolValidationError: If a parameter is variadic or lacks a description.
        """
        fields: Dict[str, Tuple[Any, FieldInfo]] = {}
        for param_name, param in inspect.signature(func).parameters.items():
            if param_name == "self":
                continue
            fields[param_name] = cls.build_field_tuple(param_name, param, tool_name).as_definition()
        return fields

    @classmethod
    def build_field_tuple(cls, param_name: str, param: inspect.Parameter, tool_name: str) -> FieldTuple:
        """Build the field for a single parameter. Parameters without a default are required.

        Raises:
            ToolValidationError: If the parameter is variadic or lacks a description.
        """
        if param.kind in _VARIADIC:
            msg = f"Parameter '{param_name}' in tool '{tool_name}' is variadic. Tools need explicit parameters."
            logger.error(msg)
            raise ToolValidationError(msg)

        description = cls._described_by(param.annotation)
        if description is None:
            msg = (
                f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
                f"Usage: {param_name}: Annotated[Type, Field(description='...')] = ..."
            )
            logger.error(msg)
            raise ToolValidationError(msg)

        default = ... if param.default is inspect.Parameter.empty else param.default
        return FieldTuple(annotation=param.annotation, field=Field(default=default, description=description))

    @staticmethod
    def _described_by(annotation: Any) -> Any:
        """Return the Field description carried by an ``Annotated`` hint, if any."""
        if get_origin(annotation) is not Annotated:
            return None
        for metadata in get_args(annotation)[1:]:
            if isinstance(metadata, FieldInfo) and metadata.description:
                return metadata.description
        return None
