"""Shape document validator.

Two passes: a structural walk of the document against
``SHAPE_DOCUMENT_SCHEMA``, then cross-shape checks the schema can't express
(duplicate entity names, relations to undeclared entities).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from entmodel.declarative.document_schema import DOCUMENT_VERSION, get_document_schema


def validate_document(data, known_entities: Iterable[str] = ()) -> list[str]:
    """Validate a parsed shape document.

    Args:
        data: The parsed YAML/JSON document (with top-level 'shapes' key).
        known_entities: Entity names already available to relations, e.g.
            shapes registered before this document is loaded.

    Returns:
        List of error messages. Empty list means valid.
    """
    issues: list[str] = []
    _validate_node(data, get_document_schema(), "", issues)
    if issues:
        return issues

    version = data.get("version")
    if version is not None and version != DOCUMENT_VERSION:
        issues.append(f".version: unsupported document version '{version}'")

    _check_entities(data.get("shapes", {}), set(known_entities), issues)
    return issues


def _check_entities(shapes: dict, known: set[str], issues: list[str]):
    owners: dict[str, str] = {}
    for class_name, decl in shapes.items():
        entity = decl["entity"]
        if entity in owners:
            issues.append(
                f".shapes.{class_name}.entity: '{entity}' is already used by {owners[entity]}"
            )
        else:
            owners[entity] = class_name

    available = known | set(owners)
    for class_name, decl in shapes.items():
        for field_name, field_decl in (decl.get("fields") or {}).items():
            target = field_decl.get("belongs_to")
            if target is not None and target not in available:
                issues.append(
                    f".shapes.{class_name}.fields.{field_name}: "
                    f"belongs_to references unknown entity '{target}'"
                )


def _validate_node(data, schema: dict, path: str, issues: list[str]):
    """Recursively validate data against a JSON Schema node."""
    if "oneOf" in schema:
        for option in schema["oneOf"]:
            option_issues: list[str] = []
            _validate_node(data, option, path, option_issues)
            if not option_issues:
                return
        issues.append(f"{path or '/'}: value does not match any of the allowed forms")
        return

    schema_type = schema.get("type")

    # Type check
    if schema_type and not _type_matches(data, schema_type):
        issues.append(f"{path or '/'}: expected type '{schema_type}', got {type(data).__name__}")
        return  # Don't recurse into wrong types

    if "enum" in schema and data not in schema["enum"]:
        issues.append(f"{path or '/'}: value '{data}' not in allowed values {schema['enum']}")

    if schema_type == "string" and isinstance(data, str):
        min_len = schema.get("minLength", 0)
        if len(data) < min_len:
            issues.append(f"{path or '/'}: string too short (min {min_len}, got {len(data)})")
        if "pattern" in schema and not re.match(schema["pattern"], data):
            issues.append(f"{path or '/'}: string '{data}' does not match pattern '{schema['pattern']}'")

    if schema_type == "object" and isinstance(data, dict):
        for req in schema.get("required", []):
            if req not in data:
                issues.append(f"{path or '/'}: missing required property '{req}'")

        names_schema = schema.get("propertyNames")
        props = schema.get("properties", {})
        extra = schema.get("additionalProperties", True)

        for key, value in data.items():
            if names_schema is not None:
                _validate_node(key, {"type": "string", **names_schema}, f"{path}.{key}", issues)
            if key in props:
                _validate_node(value, props[key], f"{path}.{key}", issues)
            elif extra is False:
                issues.append(f"{path or '/'}: unknown property '{key}'")
            elif isinstance(extra, dict):
                _validate_node(value, extra, f"{path}.{key}", issues)

    if schema_type == "array" and isinstance(data, list):
        items_schema = schema.get("items")
        if items_schema:
            for i, item in enumerate(data):
                _validate_node(item, items_schema, f"{path}[{i}]", issues)


def _type_matches(data, schema_type: str) -> bool:
    """Check if data matches the expected JSON Schema type."""
    type_map = {
        "string": str,
        "integer": int,
        "number": (int, float),
        "boolean": bool,
        "array": list,
        "object": dict,
        "null": type(None),
    }
    expected = type_map.get(schema_type)
    if expected is None:
        return True  # Unknown type, don't block
    if schema_type in ("integer", "number") and isinstance(data, bool):
        return False
    return isinstance(data, expected)
