from typing import Any, Dict, FrozenSet, NoReturn, Optional

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "definitions", "$schema", "$id", "title")


def _fail(msg: str) -> NoReturn:
    logger.error(msg)
    raise ToolValidationError(msg)


class SchemaValidator:
    """Checks tool input schemas and prepares generated ones for the provider."""

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """Reject schemas whose local ``$ref`` chains loop back on themselves.

        A definition referenced from several places is fine; only a reference
        reachable from inside its own definition counts as recursion.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        definitions = schema.get("$defs") or schema.get("definitions") or {}

        def resolve(ref: str) -> Optional[Any]:
            # Local pointers look like "#/$defs/Name"
            if not ref.startswith("#/"):
                return None
            return definitions.get(ref.rsplit("/", 1)[-1])

        def walk(node: Any, active: FrozenSet[str]) -> None:
            if isinstance(node, list):
                for item in node:
                    walk(item, active)
                return
            if not isinstance(node, dict):
                return

            ref = node.get("$ref")
            if ref is None:
                for child in node.values():
                    walk(child, active)
                return

            if ref in active:
                _fail(
                    f"Recursive structure detected: {ref}. Tool inputs must be finite trees; "
                    "pass identifiers or lists instead of self-referencing objects."
                )
            target = resolve(ref)
            if target is not None:
                walk(target, active | {ref})

        walk(schema, frozenset())

    @staticmethod
    def assert_object_schema(schema: Any, tool_name: str) -> None:
        """Make sure an explicit input schema describes a JSON object.

        A missing ``type`` is read as ``object``. Every name listed in
        ``required`` has to be declared under ``properties``.

        Raises:
            ToolValidationError: If the schema is not a usable object schema.
        """
        if not isinstance(schema, dict):
            _fail(f"Input schema of tool '{tool_name}' must be a mapping, got {type(schema).__name__}.")

        declared_type = schema.get("type", "object")
        if declared_type != "object":
            _fail(f"Input schema of tool '{tool_name}' must have type 'object', got '{declared_type}'.")

        properties = schema.get("properties", {})
        if not isinstance(properties, dict):
            _fail(f"'properties' of tool '{tool_name}' must be a mapping.")

        undeclared = [name for name in schema.get("required", []) if name not in properties]
        if undeclared:
            _fail(f"Tool '{tool_name}' requires undeclared properties: {', '.join(undeclared)}.")

    @classmethod
    def sanitize_schema(cls, schema: Any) -> Any:
        """Return a provider-friendly copy of a generated schema.

        Metadata keys are dropped, ``Optional[X]`` unions collapse to ``X``
        and object nodes default to ``additionalProperties: false``.
        Values under ``default`` are left as they are.
        """
        if not isinstance(schema, dict):
            return schema

        collapsed = cls._collapse_optional(schema)
        if collapsed is not None:
            return cls.sanitize_schema(collapsed)

        cleaned = {key: value for key, value in schema.items() if key not in _METADATA_KEYS}
        if cleaned.get("type") == "object":
            cleaned.setdefault("additionalProperties", False)

        for key, value in cleaned.items():
            if key == "default":
                continue
            if key == "properties" and isinstance(value, dict):
                # Keys here are property names, not keywords
                cleaned[key] = {name: cls.sanitize_schema(sub) for name, sub in value.items()}
            elif isinstance(value, dict):
                cleaned[key] = cls.sanitize_schema(value)
            elif isinstance(value, list):
                cleaned[key] = [cls.sanitize_schema(item) for item in value]
        return cleaned

    @staticmethod
    def _collapse_optional(schema: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Turn ``anyOf: [X, null]`` into ``X``, keeping the outer description and default."""
        variants = schema.get("anyOf")
        if not isinstance(variants, list):
            return None
        concrete = [v for v in variants if not (isinstance(v, dict) and v.get("type") == "null")]
        if len(concrete) != 1 or not isinstance(concrete[0], dict):
            return None

        merged = dict(concrete[0])
        for key in ("description", "default"):
            if key in schema:
                merged[key] = schema[key]
        return merged
