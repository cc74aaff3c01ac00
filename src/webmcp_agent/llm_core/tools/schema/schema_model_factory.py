"""Build pydantic argument models from hand-written JSON input schemas."""

from typing import Any, Dict, List, Literal, Optional, Tuple, Type, cast

from pydantic import BaseModel, ConfigDict, Field, create_model

from ...exceptions import ToolValidationError
from ...logger import get_logger
from .schema_validator import SchemaValidator

logger = get_logger(__name__)

TYPE_MAPPING: Dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "array": list,
    "object": dict,
}


class SchemaModelFactory:
    """Translates an object schema into a pydantic model used to validate call arguments.

    Only the subset of JSON Schema that tools declare in practice is understood:
    primitive ``type`` values, ``enum``, ``items`` of arrays, ``required``,
    ``default`` and ``additionalProperties``. Anything richer is accepted as ``Any``.
    """

    @classmethod
    def build(cls, tool_name: str, schema: Dict[str, Any]) -> Type[BaseModel]:
        """Create the argument model for a tool.

        Property names are attached as aliases so that names such as ``json`` or
        ``schema`` cannot collide with pydantic attributes.

        Args:
            tool_name: The name of the tool, used for the model name and errors.
            schema: The tool's input schema.

        Returns:
            A pydantic model class.

        Raises:
            ToolValidationError: If the schema is not an object schema.
        """
        SchemaValidator.assert_object_schema(schema, tool_name)

        properties: Dict[str, Any] = schema.get("properties", {})
        required = set(schema.get("required", []))
        extra = "forbid" if schema.get("additionalProperties") is False else "allow"

        fields: Dict[str, Tuple[Any, Any]] = {}
        for index, (prop_name, prop_schema) in enumerate(properties.items()):
            prop_schema = prop_schema if isinstance(prop_schema, dict) else {}
            annotation = cls._annotation_for(prop_schema)
            description = prop_schema.get("description")

            if prop_name in required:
                field = Field(default=..., alias=prop_name, description=description)
            else:
                annotation = Optional[annotation]
                field = Field(default=prop_schema.get("default"), alias=prop_name, description=description)
            fields[f"field_{index}"] = (annotation, field)

        config = ConfigDict(extra=extra, populate_by_name=False)
        model = create_model(
            f"{tool_name}Arguments",
            __config__=config,
            **cast(Dict[str, Any], fields),
        )
        logger.debug("Built argument model for '%s' with %d field(s).", tool_name, len(fields))
        return model

    @classmethod
    def _annotation_for(cls, prop_schema: Dict[str, Any]) -> Any:
        """Map one property schema to a Python annotation."""
        enum = prop_schema.get("enum")
        if isinstance(enum, list) and enum:
            return Literal[tuple(enum)]  # type: ignore[valid-type]

        schema_type = prop_schema.get("type")
        if schema_type == "array":
            items = prop_schema.get("items")
            if isinstance(items, dict):
                return List[cls._annotation_for(items)]  # type: ignore[misc]
            return List[Any]
        if isinstance(schema_type, str) and schema_type in TYPE_MAPPING:
            return TYPE_MAPPING[schema_type]
        return Any

    @staticmethod
    def dump(instance: BaseModel) -> Dict[str, Any]:
        """Return validated arguments keyed by their schema property names.

        Optional properties the caller left out are only present when the schema
        gave them a default.
        """
        result: Dict[str, Any] = {}
        for field_name, field_info in type(instance).model_fields.items():
            alias = field_info.alias or field_name
            is_set = field_name in instance.model_fields_set
            if is_set or field_info.default is not None:
                result[alias] = getattr(instance, field_name)
        if instance.model_extra:
            result.update(instance.model_extra)
        return result
