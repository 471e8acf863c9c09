"""Normalization schemas derived from Model field declarations.

A schema is a tree of ``EntitySchema`` nodes, one per entity reached through
``belongs_to`` relations, optionally wrapped in an ``ArraySchema`` for
sequences. Relation cycles are represented by shared nodes.
"""

from entmodel.schema.builder import SchemaBuilder, many, one, shape_signature
from entmodel.schema.models import ArraySchema, EntitySchema, Schema

__all__ = [
    "ArraySchema",
    "EntitySchema",
    "Schema",
    "SchemaBuilder",
    "one",
    "many",
    "shape_signature",
]
