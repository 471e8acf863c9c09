"""entmodel — typed entity models and normalization for keyed-table stores.

Declare record shapes as ``Model`` subclasses, instantiate records with
defaulted field values, and flatten nested record graphs into per-entity
tables plus a reference-only result.
"""

__version__ = "0.1.0"

from entmodel.attributes import Attr, AttrType, BelongsTo, attr, belongs_to
from entmodel.data import NormalizedData, Normalizer, normalize
from entmodel.errors import (
    AmbiguousEntityName,
    EntityModelError,
    InvalidShapeReference,
    MissingIdentifier,
    SchemaArityMismatch,
    ShapeDocumentError,
)
from entmodel.model import Model
from entmodel.registry import ShapeRegistry
from entmodel.schema import ArraySchema, EntitySchema, SchemaBuilder

__all__ = [
    "__version__",
    "Attr",
    "AttrType",
    "BelongsTo",
    "attr",
    "belongs_to",
    "Model",
    "EntitySchema",
    "ArraySchema",
    "SchemaBuilder",
    "NormalizedData",
    "Normalizer",
    "normalize",
    "ShapeRegistry",
    "EntityModelError",
    "InvalidShapeReference",
    "AmbiguousEntityName",
    "SchemaArityMismatch",
    "MissingIdentifier",
    "ShapeDocumentError",
]
