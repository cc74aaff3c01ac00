"""Tool schema generation and validation."""

from .schema_validator import SchemaValidator
from .tool_param_factory import ToolParameterFactory, FieldTuple
from .schema_model_factory import SchemaModelFactory

__all__ = ["SchemaValidator", "ToolParameterFactory", "FieldTuple", "SchemaModelFactory"]
