"""Model — the base class every record shape extends.

A concrete shape sets ``entity`` (the name of its table in a normalized
store) and overrides ``fields()``::

    class User(Model):
        entity = "users"

        @classmethod
        def fields(cls):
            return {"id": cls.attr(None), "name": cls.attr("")}

    class Post(Model):
        entity = "posts"

        @classmethod
        def fields(cls):
            return {
                "id": cls.attr(None),
                "title": cls.attr(""),
                "author": cls.belongs_to(User, "author"),
            }

Relations are resolved lazily because ``fields()`` is only called when
needed, so shapes may reference each other in either order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from entmodel.attributes import Attr, BelongsTo, Fields, attr, belongs_to
from entmodel.data.models import NormalizedData
from entmodel.data.normalizer import Normalizer
from entmodel.errors import MissingIdentifier
from entmodel.merge import attribute_values, merge_fields
from entmodel.schema.builder import SchemaBuilder
from entmodel.schema.models import Schema


class Model:
    """Abstract record shape. Subclass it; don't instantiate it directly."""

    # Name of the entity table this shape normalizes into.
    entity: str = ""

    # Field holding the record identifier during normalization.
    primary_key: str = "id"

    def __init__(self, data: Mapping[str, Any] | None = None):
        if type(self) is Model:
            raise TypeError("Model is abstract; declare a subclass")
        self.initialize(data)

    # --- Shape declaration ---

    @classmethod
    def fields(cls) -> Fields:
        """The definition of the fields of the model and its relations."""
        return {}

    @classmethod
    def attr(cls, value: Any = None) -> Attr:
        """A generic attribute; ``value`` is the default on instantiation."""
        return attr(value)

    @classmethod
    def belongs_to(cls, model: type[Model], foreign_key: str) -> BelongsTo:
        """A belongs-to relationship to ``model``."""
        return belongs_to(model, foreign_key)

    # --- Normalization ---

    @classmethod
    def schema(cls, many: bool = False) -> Schema:
        """Build the normalization schema for this shape.

        Args:
            many: If true, returns a schema for a sequence of records.
        """
        builder = SchemaBuilder()
        return builder.build(cls, many=many)

    @classmethod
    def normalize(cls, data: Any) -> NormalizedData:
        """Normalize one record, or a list of records, of this shape."""
        schema = cls.schema(many=isinstance(data, (list, tuple)))
        return Normalizer().normalize(data, schema)

    @classmethod
    def identify(cls, record: Mapping[str, Any]) -> Any:
        """Return the identifier of a raw ``record``.

        Override for shapes whose identity is derived from several fields.
        """
        value = record.get(cls.primary_key)
        if value is None:
            raise MissingIdentifier(cls.entity, cls.primary_key)
        return value

    # --- Instance ---

    def model_class(self) -> type[Model]:
        return type(self)

    def instance_fields(self) -> Fields:
        return self.model_class().fields()

    def initialize(self, data: Mapping[str, Any] | None = None) -> None:
        """Attach every plain attribute field to the instance.

        Relation fields are left alone; resolving them is up to the store.
        """
        fields = self.merge_fields(data)
        for name, value in attribute_values(fields).items():
            setattr(self, name, value)

    def merge_fields(self, data: Mapping[str, Any] | None = None) -> Fields:
        """Merge given data into the fields' default values."""
        return merge_fields(self.instance_fields(), data)

    def to_dict(self) -> dict[str, Any]:
        """Current values of every declared field set on the instance."""
        return {
            name: self.__dict__[name]
            for name in self.instance_fields()
            if name in self.__dict__
        }

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in self.instance_fields():
            raise AttributeError(
                f"{type(self).__name__} has no declared field '{name}'"
            )
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({values})"
