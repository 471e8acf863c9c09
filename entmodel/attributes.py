"""Field descriptors — the two kinds of field a Model can declare.

A field is either a plain attribute carrying a default value, or a
``belongs_to`` relation pointing at another Model's entity table. Every
consumer (merge, schema build, normalize) switches on ``AttrType``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from entmodel.errors import InvalidShapeReference

if TYPE_CHECKING:
    from entmodel.model import Model


class AttrType(Enum):
    ATTR = "attr"
    BELONGS_TO = "belongs_to"


@dataclass(frozen=True)
class Attr:
    """A plain field. ``value`` is used as the default on instantiation."""

    value: Any = None

    @property
    def type(self) -> AttrType:
        return AttrType.ATTR


@dataclass(frozen=True)
class BelongsTo:
    """A to-one, lookup-only reference to another Model.

    The record is associated with an instance of ``model`` through the value
    stored under ``foreign_key``. No ownership is implied.
    """

    model: type[Model]
    foreign_key: str

    @property
    def type(self) -> AttrType:
        return AttrType.BELONGS_TO


Field = Union[Attr, BelongsTo]
Fields = dict[str, Field]


def attr(value: Any = None) -> Attr:
    """Create a plain attribute. The value is stored verbatim."""
    return Attr(value)


def belongs_to(model: type[Model], foreign_key: str) -> BelongsTo:
    """Create a belongs-to relation to ``model`` keyed by ``foreign_key``."""
    from entmodel.model import Model

    if not (isinstance(model, type) and issubclass(model, Model)):
        raise InvalidShapeReference(
            f"belongs_to target must be a Model subclass, got {model!r}"
        )
    if not isinstance(foreign_key, str) or not foreign_key:
        raise InvalidShapeReference(
            f"belongs_to({model.__name__}) needs a non-empty foreign key name"
        )
    return BelongsTo(model, foreign_key)
