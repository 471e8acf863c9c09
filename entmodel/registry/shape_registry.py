"""In-memory shape registry."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from entmodel.config.logging import get_logger
from entmodel.errors import AmbiguousEntityName, InvalidShapeReference

if TYPE_CHECKING:
    from entmodel.model import Model

logger = get_logger(__name__)


class ShapeRegistry:
    """Maps entity names to Model subclasses.

    Create one per group of shapes used together and ``clear()`` it when
    done. There is no process-wide instance.
    """

    def __init__(self, shapes: list[type[Model]] | None = None):
        self._shapes: dict[str, type[Model]] = {}
        for shape in shapes or []:
            self.register(shape)

    def register(self, shape: type[Model]) -> type[Model]:
        """Register ``shape`` under its entity name.

        Re-registering the same class is a no-op. Returns the shape so this
        can be used as a class decorator.
        """
        from entmodel.model import Model

        if not (isinstance(shape, type) and issubclass(shape, Model)):
            raise InvalidShapeReference(f"Only Model subclasses can be registered, got {shape!r}")

        key = shape.entity
        if not key:
            raise AmbiguousEntityName(f"{shape.__name__} has no entity name")

        existing = self._shapes.get(key)
        if existing is not None and existing is not shape:
            raise AmbiguousEntityName(
                f"Entity name '{key}' is already registered by {existing.__name__}"
            )

        self._shapes[key] = shape
        logger.debug("Registered shape %s as '%s'", shape.__name__, key)
        return shape

    def unregister(self, entity: str) -> None:
        self._shapes.pop(entity, None)

    def get(self, entity: str) -> type[Model] | None:
        return self._shapes.get(entity)

    def resolve(self, entity: str) -> type[Model]:
        """Like ``get`` but raises for unknown names."""
        shape = self._shapes.get(entity)
        if shape is None:
            raise InvalidShapeReference(f"No shape registered for entity '{entity}'")
        return shape

    def clear(self) -> None:
        self._shapes.clear()

    @property
    def entities(self) -> list[str]:
        return list(self._shapes)

    def __contains__(self, entity: object) -> bool:
        return entity in self._shapes

    def __iter__(self) -> Iterator[type[Model]]:
        return iter(list(self._shapes.values()))

    def __len__(self) -> int:
        return len(self._shapes)
