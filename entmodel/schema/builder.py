"""Schema builder — derive a normalization schema from a Model.

Nodes are memoized by entity name for the duration of one build, and a
node is registered before its relations are visited, so relation cycles
(A belongs to B, B belongs to A) resolve to the in-progress node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from entmodel.attributes import AttrType
from entmodel.config.logging import get_logger
from entmodel.errors import AmbiguousEntityName
from entmodel.schema.models import ArraySchema, EntitySchema, Schema

if TYPE_CHECKING:
    from entmodel.model import Model

logger = get_logger(__name__)


def shape_signature(shape: type[Model]) -> tuple[tuple[str, str, str, str], ...]:
    """Structural fingerprint of a shape's field declarations."""
    entries = []
    for name, f in shape.fields().items():
        if f.type is AttrType.BELONGS_TO:
            entries.append((name, f.type.value, f.model.entity, f.foreign_key))
        else:
            entries.append((name, f.type.value, "", ""))
    return tuple(sorted(entries))


class SchemaBuilder:
    """Builds ``EntitySchema`` trees from Model field declarations."""

    def build(
        self,
        shape: type[Model],
        many: bool = False,
        seen: dict[str, EntitySchema] | None = None,
    ) -> Schema:
        """Build the schema for ``shape``.

        Args:
            shape: The Model subclass to derive the schema from.
            many: Wrap the result in an ``ArraySchema``.
            seen: Nodes already built in this pass, keyed by entity name.
                A fresh map is used when omitted.
        """
        if seen is None:
            seen = {}
        node = self._build_entity(shape, seen)
        return ArraySchema(node) if many else node

    def _build_entity(self, shape: type[Model], seen: dict[str, EntitySchema]) -> EntitySchema:
        key = getattr(shape, "entity", "")
        if not isinstance(key, str) or not key:
            raise AmbiguousEntityName(f"{shape.__name__} has no entity name")

        existing = seen.get(key)
        if existing is not None:
            if existing.shape is not shape and shape_signature(existing.shape) != shape_signature(shape):
                raise AmbiguousEntityName(
                    f"Entity name '{key}' is declared by both "
                    f"{existing.shape.__name__} and {shape.__name__} with different fields"
                )
            logger.debug("Reusing schema node for '%s'", key)
            return existing

        fields = shape.fields()
        node = EntitySchema(key=key, shape=shape, field_names=frozenset(fields))
        seen[key] = node

        for name, f in fields.items():
            if f.type is AttrType.ATTR:
                continue
            if f.type is AttrType.BELONGS_TO:
                node.relations[name] = self._build_entity(f.model, seen)
                node.foreign_keys[name] = f.foreign_key
            else:
                raise TypeError(f"{shape.__name__}.{name}: unknown field type {f.type!r}")

        logger.debug("Built schema node for '%s' (%d relation(s))", key, len(node.relations))
        return node


def one(shape: type[Model]) -> EntitySchema:
    """Schema for a single record of ``shape``."""
    return SchemaBuilder().build(shape)


def many(shape: type[Model]) -> ArraySchema:
    """Schema for a sequence of records of ``shape``."""
    return SchemaBuilder().build(shape, many=True)
