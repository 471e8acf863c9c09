"""Normalizer — flatten nested records against a schema.

Every record visited, nested ones included, is extracted into
``entities[entity][id]``. Nested records are replaced by their identifier
in the parent's flat record. Records seen more than once under the same
identifier are shallow-merged, later fields winning.

Input data must be acyclic.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from entmodel.config.logging import get_logger
from entmodel.data.models import NormalizedData
from entmodel.errors import SchemaArityMismatch
from entmodel.schema.models import ArraySchema, EntitySchema, Schema

logger = get_logger(__name__)


class Normalizer:
    """Walks raw data against a built schema."""

    def normalize(self, data: Any, schema: Schema) -> NormalizedData:
        entities: dict[str, dict[Any, dict[str, Any]]] = {}
        result = self._visit(data, schema, entities)
        return NormalizedData(entities=entities, result=result)

    def _visit(self, data: Any, schema: Schema, entities: dict) -> Any:
        if isinstance(schema, ArraySchema):
            return self._visit_array(data, schema, entities)
        if isinstance(schema, EntitySchema):
            return self._visit_entity(data, schema, entities)
        raise TypeError(f"Not a schema: {schema!r}")

    def _visit_array(self, data: Any, schema: ArraySchema, entities: dict) -> list:
        if not isinstance(data, (list, tuple)):
            raise SchemaArityMismatch(
                f"Expected a sequence of '{schema.key}' records, got {type(data).__name__}"
            )
        return [self._visit_entity(item, schema.item, entities) for item in data]

    def _visit_entity(self, data: Any, schema: EntitySchema, entities: dict) -> Any:
        if isinstance(data, (list, tuple)):
            raise SchemaArityMismatch(
                f"Expected a single '{schema.key}' record, got a sequence of {len(data)}"
            )
        if not isinstance(data, Mapping):
            # None, or an identifier that is already normalized
            return data

        identifier = schema.shape.identify(data)

        foreign_key_names = set(schema.foreign_keys.values())
        flat: dict[str, Any] = {}
        for key, value in data.items():
            if key == schema.primary_key or key in schema.field_names or key in foreign_key_names:
                flat[key] = value

        for name, child in schema.relations.items():
            if name not in data:
                continue
            foreign_key = schema.foreign_keys.get(name, name)
            value = data[name]
            if value is None:
                # An explicit null relation clears its foreign key too
                if foreign_key != name and foreign_key not in data:
                    flat[foreign_key] = None
                continue
            ref = self._visit(value, child, entities)
            flat[name] = ref
            if foreign_key != name and not isinstance(ref, (list, tuple)):
                flat[foreign_key] = ref

        self._store(entities, schema.key, identifier, flat)
        return identifier

    def _store(self, entities: dict, key: str, identifier: Any, flat: dict[str, Any]) -> None:
        table = entities.setdefault(key, {})
        existing = table.get(identifier)
        if existing is None:
            table[identifier] = flat
            return
        logger.debug("Merging duplicate '%s' record %r", key, identifier)
        table[identifier] = {**existing, **flat}


def normalize(data: Any, schema: Schema) -> NormalizedData:
    """Normalize ``data`` against ``schema``."""
    return Normalizer().normalize(data, schema)
