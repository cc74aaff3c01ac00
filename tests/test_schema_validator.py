import pytest

from webmcp_agent.llm_core.tools.schema import SchemaModelFactory, SchemaValidator
from webmcp_agent.llm_core.exceptions import ToolValidationError


def test_assert_no_recursive_refs_no_recursion() -> None:
    schema = {
        "$defs": {"Account": {"type": "object", "properties": {"id": {"type": "string"}}}},
        "type": "object",
        "properties": {
            "source": {"$ref": "#/$defs/Account"},
            "target": {"$ref": "#/$defs/Account"},
        },
    }
    # Reusing a definition twice is not recursion
    SchemaValidator.assert_no_recursive_refs(schema)


def test_assert_no_recursive_refs_with_recursion() -> None:
    schema = {
        "$defs": {"Node": {"type": "object", "properties": {"child": {"$ref": "#/$defs/Node"}}}},
        "properties": {"root": {"$ref": "#/$defs/Node"}},
    }
    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        SchemaValidator.assert_no_recursive_refs(schema)


def test_sanitize_schema_removes_metadata() -> None:
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "http://example.com/schema",
        "title": "TransferArguments",
        "type": "object",
        "properties": {"amount": {"type": "number", "title": "Amount"}},
        "definitions": {"Unused": {}},
    }
    sanitized = SchemaValidator.sanitize_schema(schema)

    for key in ("$schema", "$id", "title", "definitions"):
        assert key not in sanitized
    assert sanitized["properties"]["amount"] == {"type": "number"}


def test_sanitize_schema_simplifies_optional() -> None:
    schema = {
        "type": "object",
        "properties": {
            "memo": {
                "anyOf": [{"type": "string", "description": "Inner"}, {"type": "null"}],
                "description": "Transfer memo",
                "default": None,
            }
        },
    }
    field = SchemaValidator.sanitize_schema(schema)["properties"]["memo"]

    assert field == {"type": "string", "description": "Transfer memo", "default": None}


def test_sanitize_schema_enforces_additional_properties() -> None:
    schema = {"type": "object", "properties": {"nested": {"type": "object", "properties": {}}}}
    sanitized = SchemaValidator.sanitize_schema(schema)

    assert sanitized["additionalProperties"] is False
    assert sanitized["properties"]["nested"]["additionalProperties"] is False


def test_sanitize_schema_keeps_default_values_untouched() -> None:
    schema = {"type": "object", "properties": {"filter": {"type": "object", "default": {"title": "x"}}}}
    sanitized = SchemaValidator.sanitize_schema(schema)
    assert sanitized["properties"]["filter"]["default"] == {"title": "x"}


@pytest.mark.parametrize(
    "schema, message",
    [
        ([], "must be a mapping"),
        ({"type": "array"}, "must have type 'object'"),
        ({"type": "object", "properties": []}, "'properties'"),
        ({"type": "object", "properties": {"a": {}}, "required": ["a", "b"]}, "undeclared properties: b"),
    ],
)
def test_assert_object_schema(schema: object, message: str) -> None:
    with pytest.raises(ToolValidationError, match=message):
        SchemaValidator.assert_object_schema(schema, "tool")


def test_schema_model_factory_extra_policy() -> None:
    strict = SchemaModelFactory.build("strict", {"type": "object", "additionalProperties": False})
    loose = SchemaModelFactory.build("loose", {"type": "object"})

    assert strict.model_config["extra"] == "forbid"
    assert loose.model_config["extra"] == "allow"
    assert SchemaModelFactory.dump(loose.model_validate({"anything": 1})) == {"anything": 1}
