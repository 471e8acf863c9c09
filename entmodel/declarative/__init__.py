"""Declarative shapes — declare Models in a YAML document.

A document maps class names to shape declarations::

    shapes:
      User:
        entity: users
        fields:
          id: {attr: null}
          name: {attr: ""}
      Post:
        entity: posts
        fields:
          id: {attr: null}
          title: {attr: ""}
          author: {belongs_to: users, foreign_key: author_id}

``belongs_to`` names the target's entity, so declarations may reference
each other in any order, cycles included.
"""

from entmodel.declarative.document_schema import (
    DOCUMENT_VERSION,
    SHAPE_DOCUMENT_SCHEMA,
    get_document_schema,
)
from entmodel.declarative.loader import load_shapes, read_document
from entmodel.declarative.validator import validate_document

__all__ = [
    "DOCUMENT_VERSION",
    "SHAPE_DOCUMENT_SCHEMA",
    "get_document_schema",
    "load_shapes",
    "read_document",
    "validate_document",
]
