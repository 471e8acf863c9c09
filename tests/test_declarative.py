"""Tests for YAML shape documents (schema, validator, loader)."""

import tempfile
from pathlib import Path

import pytest
import yaml

from entmodel.attributes import AttrType
from entmodel.declarative import (
    DOCUMENT_VERSION,
    get_document_schema,
    load_shapes,
    validate_document,
)
from entmodel.errors import ShapeDocumentError
from entmodel.model import Model
from entmodel.registry import ShapeRegistry


def _make_valid_document(**extra_shapes) -> dict:
    """Build a minimal valid shape document."""
    data = {
        "version": DOCUMENT_VERSION,
        "shapes": {
            "User": {
                "entity": "users",
                "fields": {
                    "id": {"attr": None},
                    "name": {"attr": ""},
                },
            },
            "Post": {
                "entity": "posts",
                "fields": {
                    "id": {"attr": None},
                    "title": {"attr": ""},
                    "author": {"belongs_to": "users", "foreign_key": "author_id"},
                },
            },
        },
    }
    data["shapes"].update(extra_shapes)
    return data


# --- Schema ---


def test_document_schema_exists():
    schema = get_document_schema()
    assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"
    assert "shapes" in schema["properties"]


# --- Validation ---


def test_valid_document():
    issues = validate_document(_make_valid_document())
    assert issues == [], f"Valid document should have no issues: {issues}"


def test_missing_shapes_key():
    issues = validate_document({"models": {}})
    assert any("shapes" in i for i in issues)


def test_document_must_be_mapping():
    issues = validate_document(["not", "a", "document"])
    assert any("expected type 'object'" in i for i in issues)


def test_missing_entity():
    data = _make_valid_document()
    del data["shapes"]["User"]["entity"]
    issues = validate_document(data)
    assert any("entity" in i for i in issues)


def test_unknown_shape_property():
    data = _make_valid_document()
    data["shapes"]["User"]["table"] = "users"
    issues = validate_document(data)
    assert any("unknown property 'table'" in i for i in issues)


def test_invalid_class_name():
    data = _make_valid_document(**{"9Lives": {"entity": "cats", "fields": {}}})
    issues = validate_document(data)
    assert any("9Lives" in i and "pattern" in i for i in issues)


def test_invalid_field_form():
    data = _make_valid_document()
    data["shapes"]["User"]["fields"]["name"] = {"attr": "", "belongs_to": "users"}
    issues = validate_document(data)
    assert any("fields.name" in i for i in issues)


def test_belongs_to_needs_foreign_key():
    data = _make_valid_document()
    data["shapes"]["Post"]["fields"]["author"] = {"belongs_to": "users"}
    issues = validate_document(data)
    assert any("fields.author" in i for i in issues)


def test_unknown_relation_target():
    data = _make_valid_document()
    data["shapes"]["Post"]["fields"]["author"]["belongs_to"] = "people"
    issues = validate_document(data)
    assert any("unknown entity 'people'" in i for i in issues)


def test_known_entities_satisfy_relations():
    data = {
        "shapes": {
            "Comment": {
                "entity": "comments",
                "fields": {"post": {"belongs_to": "posts", "foreign_key": "post_id"}},
            },
        }
    }
    assert validate_document(data) != []
    assert validate_document(data, known_entities=["posts"]) == []


def test_duplicate_entity_names():
    data = _make_valid_document(Author={"entity": "users", "fields": {}})
    issues = validate_document(data)
    assert any("already used by User" in i for i in issues)


def test_unsupported_version():
    data = _make_valid_document()
    data["version"] = "99"
    issues = validate_document(data)
    assert any("version" in i for i in issues)


# --- Loading ---


def test_load_from_dict():
    registry = load_shapes(_make_valid_document())
    assert registry.entities == ["users", "posts"]

    Post = registry.resolve("posts")
    assert issubclass(Post, Model)
    assert Post.__name__ == "Post"
    assert Post.primary_key == "id"

    fields = Post.fields()
    assert fields["title"].value == ""
    assert fields["author"].type is AttrType.BELONGS_TO
    assert fields["author"].model is registry.resolve("users")
    assert fields["author"].foreign_key == "author_id"


def test_loaded_shapes_instantiate_and_normalize():
    registry = load_shapes(_make_valid_document())
    User = registry.resolve("users")
    Post = registry.resolve("posts")

    user = User({"name": "Bob", "extra": "ignored"})
    assert user.to_dict() == {"id": None, "name": "Bob"}

    normalized = Post.normalize({"id": 10, "title": "Hi", "author": {"id": 1, "name": "Ann"}})
    assert normalized.entities == {
        "posts": {10: {"id": 10, "title": "Hi", "author": 1, "author_id": 1}},
        "users": {1: {"id": 1, "name": "Ann"}},
    }


def test_load_cyclic_document():
    data = {
        "shapes": {
            "Employee": {
                "entity": "employees",
                "fields": {
                    "id": {"attr": None},
                    "team": {"belongs_to": "teams", "foreign_key": "team_id"},
                },
            },
            "Team": {
                "entity": "teams",
                "fields": {
                    "id": {"attr": None},
                    "lead": {"belongs_to": "employees", "foreign_key": "lead_id"},
                },
            },
        }
    }
    registry = load_shapes(data)
    schema = registry.resolve("employees").schema()
    assert schema.relations["team"].relations["lead"] is schema


def test_custom_primary_key_and_description():
    data = {
        "shapes": {
            "Country": {
                "entity": "countries",
                "primary_key": "code",
                "description": "ISO countries.",
                "fields": {"code": {"attr": ""}, "name": {"attr": ""}},
            },
        }
    }
    Country = load_shapes(data).resolve("countries")
    assert Country.primary_key == "code"
    assert Country.__doc__ == "ISO countries."
    assert Country.normalize({"code": "FR", "name": "France"}).result == "FR"


def test_load_into_existing_registry():
    registry = load_shapes(_make_valid_document())
    extra = {
        "shapes": {
            "Comment": {
                "entity": "comments",
                "fields": {
                    "id": {"attr": None},
                    "post": {"belongs_to": "posts", "foreign_key": "post_id"},
                },
            },
        }
    }
    same = load_shapes(extra, registry=registry)
    assert same is registry
    assert registry.resolve("comments").fields()["post"].model is registry.resolve("posts")


def test_load_invalid_document_raises():
    data = _make_valid_document()
    data["shapes"]["Post"]["fields"]["author"]["belongs_to"] = "people"
    with pytest.raises(ShapeDocumentError) as exc_info:
        load_shapes(data)
    assert len(exc_info.value.issues) == 1


def test_load_from_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "shapes.yaml"
        with open(path, "w") as f:
            yaml.dump(_make_valid_document(), f)

        registry = load_shapes(path)
        assert "users" in registry
        assert "posts" in registry


def test_load_invalid_file_reports_source():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "broken.yaml"
        with open(path, "w") as f:
            yaml.dump({"shapes": {"User": {"fields": {}}}}, f)

        with pytest.raises(ShapeDocumentError) as exc_info:
            load_shapes(path)
        assert exc_info.value.source == str(path)


def test_loaded_shapes_are_isolated_per_registry():
    first = load_shapes(_make_valid_document())
    second = load_shapes(_make_valid_document(), registry=ShapeRegistry())
    assert first.resolve("users") is not second.resolve("users")
