"""Error kinds raised by entmodel.

Every error is a local, synchronous failure surfaced to the immediate caller.
Unknown or missing input fields are never errors.
"""

from __future__ import annotations


class EntityModelError(Exception):
    """Base class for all entmodel errors."""


class InvalidShapeReference(EntityModelError):
    """A relation was declared against something that is not a Model."""


class AmbiguousEntityName(EntityModelError):
    """An entity name is empty or shared by structurally different shapes."""


class SchemaArityMismatch(EntityModelError):
    """Data does not match the singular/plural form of its schema."""


class MissingIdentifier(EntityModelError):
    """A record lacks the field needed to key it in the entity table."""

    def __init__(self, entity: str, primary_key: str):
        self.entity = entity
        self.primary_key = primary_key
        super().__init__(
            f"{entity}: record has no value for identifier field '{primary_key}'"
        )


class ShapeDocumentError(EntityModelError):
    """A YAML shape document failed validation."""

    def __init__(self, issues: list[str], source: str = ""):
        self.issues = list(issues)
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"{len(self.issues)} issue(s){where}: " + "; ".join(self.issues))
