"""Shape loader — turn a shape document into Model subclasses."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from entmodel.attributes import Fields
from entmodel.config.logging import get_logger
from entmodel.declarative.validator import validate_document
from entmodel.errors import ShapeDocumentError
from entmodel.model import Model
from entmodel.registry import ShapeRegistry

logger = get_logger(__name__)


def read_document(path: str | Path) -> Any:
    """Parse a YAML (or JSON) file."""
    with open(path) as f:
        return yaml.safe_load(f)


def load_shapes(
    source: str | Path | dict,
    registry: ShapeRegistry | None = None,
) -> ShapeRegistry:
    """Create and register one Model subclass per declared shape.

    Args:
        source: Path to a shape document, or an already parsed document.
        registry: Registry to add the shapes to. Relations may target
            shapes already registered there. A new registry is created when
            omitted.

    Raises:
        ShapeDocumentError: If the document is invalid.
    """
    if isinstance(source, dict):
        data, origin = source, ""
    else:
        data, origin = read_document(source), str(source)

    registry = registry if registry is not None else ShapeRegistry()

    issues = validate_document(data, known_entities=registry.entities)
    if issues:
        raise ShapeDocumentError(issues, source=origin)

    for class_name, decl in data["shapes"].items():
        registry.register(_make_shape(class_name, decl, registry))

    logger.debug("Loaded %d shape(s) from %s", len(data["shapes"]), origin or "document")
    return registry


def _make_shape(class_name: str, decl: dict, registry: ShapeRegistry) -> type[Model]:
    declared = dict(decl["fields"])

    def fields(cls) -> Fields:
        result: Fields = {}
        for name, field_decl in declared.items():
            if "belongs_to" in field_decl:
                target = registry.resolve(field_decl["belongs_to"])
                result[name] = cls.belongs_to(target, field_decl["foreign_key"])
            else:
                result[name] = cls.attr(field_decl["attr"])
        return result

    namespace = {
        "__module__": __name__,
        "__doc__": decl.get("description") or f"Shape '{decl['entity']}' loaded from a document.",
        "entity": decl["entity"],
        "primary_key": decl.get("primary_key", "id"),
        "fields": classmethod(fields),
    }
    return type(class_name, (Model,), namespace)
