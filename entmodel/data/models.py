"""Normalized data container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class NormalizedData:
    """Flat entity tables plus the reference-only result skeleton.

    ``entities`` maps entity name to identifier to flat record. ``result`` is
    an identifier, a list of identifiers, or the input passed through when
    nothing was extracted.
    """

    entities: dict[str, dict[Any, dict[str, Any]]] = field(default_factory=dict)
    result: Any = None

    def table(self, entity: str) -> dict[Any, dict[str, Any]]:
        return self.entities.get(entity, {})

    @property
    def entity_count(self) -> int:
        return sum(len(t) for t in self.entities.values())

    def to_dict(self) -> dict[str, Any]:
        return {"entities": self.entities, "result": self.result}
