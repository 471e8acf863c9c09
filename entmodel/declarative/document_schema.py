"""JSON Schema for shape documents.

This is the structural definition checked before any shape is created.
Tools can export it and use it with any JSON Schema validator.
"""

DOCUMENT_VERSION = "1"

IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"

ATTR_FIELD: dict = {
    "type": "object",
    "required": ["attr"],
    "additionalProperties": False,
    "properties": {
        "attr": {
            "description": "Default value used when a record doesn't supply one.",
        },
    },
}

BELONGS_TO_FIELD: dict = {
    "type": "object",
    "required": ["belongs_to", "foreign_key"],
    "additionalProperties": False,
    "properties": {
        "belongs_to": {
            "type": "string",
            "minLength": 1,
            "description": "Entity name of the referenced shape.",
        },
        "foreign_key": {
            "type": "string",
            "minLength": 1,
            "description": "Field holding the referenced record's identifier.",
        },
    },
}

SHAPE_DOCUMENT_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "entmodel shape document",
    "type": "object",
    "required": ["shapes"],
    "additionalProperties": False,
    "properties": {
        "version": {"type": "string"},
        "shapes": {
            "type": "object",
            "propertyNames": {"pattern": IDENTIFIER_PATTERN},
            "additionalProperties": {
                "type": "object",
                "required": ["entity", "fields"],
                "additionalProperties": False,
                "properties": {
                    "entity": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Entity table name; unique across the document.",
                    },
                    "primary_key": {
                        "type": "string",
                        "minLength": 1,
                        "default": "id",
                    },
                    "description": {"type": "string"},
                    "fields": {
                        "type": "object",
                        "propertyNames": {"pattern": IDENTIFIER_PATTERN},
                        "additionalProperties": {
                            "oneOf": [ATTR_FIELD, BELONGS_TO_FIELD],
                        },
                    },
                },
            },
        },
    },
}


def get_document_schema() -> dict:
    """Return the JSON Schema for shape documents."""
    return SHAPE_DOCUMENT_SCHEMA
