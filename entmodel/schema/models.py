"""Schema nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from entmodel.model import Model


@dataclass(eq=False)
class EntitySchema:
    """Extraction point for one entity.

    ``relations`` maps a relation field name to the schema of the entity it
    points at. The child may be an ancestor of this node when shapes
    reference each other.
    """

    key: str
    shape: type[Model]
    field_names: frozenset[str] = frozenset()
    relations: dict[str, EntitySchema] = field(default_factory=dict)
    foreign_keys: dict[str, str] = field(default_factory=dict)

    @property
    def primary_key(self) -> str:
        return self.shape.primary_key

    def describe(self, _path: tuple[str, ...] = ()) -> dict[str, Any]:
        """A finite, plain-dict view of the tree rooted here."""
        path = _path + (self.key,)
        relations: dict[str, Any] = {}
        for name, child in self.relations.items():
            if child.key in path:
                relations[name] = {"ref": child.key}
            else:
                relations[name] = child.describe(path)
        return {
            "entity": self.key,
            "primary_key": self.primary_key,
            "relations": relations,
        }

    def __repr__(self) -> str:
        return f"EntitySchema({self.key!r}, relations={sorted(self.relations)})"


@dataclass(eq=False)
class ArraySchema:
    """A sequence of records sharing one entity schema."""

    item: EntitySchema

    @property
    def key(self) -> str:
        return self.item.key

    def describe(self) -> dict[str, Any]:
        return {"many": self.item.describe()}


Schema = Union[EntitySchema, ArraySchema]
