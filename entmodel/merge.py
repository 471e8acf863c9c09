"""Field merge — reconcile declared field defaults with raw record data."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from entmodel.attributes import Attr, AttrType, Fields


def merge_fields(declared: Fields, data: Mapping[str, Any] | None = None) -> Fields:
    """Merge raw ``data`` into the declared field defaults.

    Returns a fresh mapping; ``declared`` and its descriptors are never
    mutated. Only plain attributes take raw values. Relation entries are
    kept as declared, and keys that aren't declared are dropped.
    """
    merged: Fields = dict(declared)
    if not data:
        return merged

    for key, value in data.items():
        if key not in merged:
            continue
        if merged[key].type is AttrType.ATTR:
            merged[key] = Attr(value)

    return merged


def attribute_values(fields: Fields) -> dict[str, Any]:
    """Values to assign onto an instance for every plain attribute.

    Values are deep-copied so instances never share a mutable default.
    """
    return {
        name: copy.deepcopy(f.value)
        for name, f in fields.items()
        if f.type is AttrType.ATTR
    }
