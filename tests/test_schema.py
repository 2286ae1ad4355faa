"""Tests for the normalized schema model and metadata document."""

import pytest

from prisma_extractor.codegen.core.schema import (
    EnumDefinition,
    EnumValue,
    FieldDefinition,
    FieldKind,
    RecordDefinition,
    SchemaModel,
)


def test_metadata_round_trip(blog_model):
    assert SchemaModel.from_dict(blog_model.to_dict()) == blog_model


def test_metadata_document_shape(blog_model):
    document = blog_model.to_dict()

    assert list(document) == ["records", "enums"]
    user = document["records"][0]
    assert user["name"] == "User"
    assert user["fields"][0] == {
        "name": "id",
        "kind": "scalar",
        "type": "Int",
        "isRequired": True,
        "isList": False,
        "isId": True,
        "isUnique": False,
        "isUpdatedAt": False,
        "hasDefaultValue": True,
        "relationName": None,
        "documentation": "Primary key",
    }
    assert "documentation" not in user["fields"][1]
    assert document["enums"][0] == {
        "name": "Role",
        "values": [{"name": "ADMIN"}, {"name": "USER"}],
        "documentation": "Access level of a user",
    }


def test_namespace_and_lookups(blog_model):
    assert blog_model.names() == {
        "User": FieldKind.OBJECT,
        "Post": FieldKind.OBJECT,
        "Role": FieldKind.ENUM,
    }
    assert blog_model.kind_of("Role") == FieldKind.ENUM
    assert blog_model.kind_of("String") == FieldKind.SCALAR
    assert blog_model.find_enum("Role").value_names == ["ADMIN", "USER"]
    assert blog_model.find_record("Missing") is None


def test_definitions_are_immutable():
    field = FieldDefinition(name="id", type="Int")
    with pytest.raises(AttributeError):
        field.name = "other"


def test_is_relation_only_for_object_fields():
    assert FieldDefinition("u", "User", FieldKind.OBJECT).is_relation
    assert not FieldDefinition("r", "Role", FieldKind.ENUM).is_relation
    assert not FieldDefinition("s", "String").is_relation


def test_from_dict_defaults():
    model = SchemaModel.from_dict(
        {"records": [{"name": "T", "fields": [{"name": "x", "type": "String"}]}]}
    )

    assert model.enums == ()
    field = model.records[0].fields[0]
    assert field.kind == FieldKind.SCALAR
    assert field.is_required is True
    assert field.is_list is False


def test_empty_model():
    assert SchemaModel().is_empty
    assert not SchemaModel(enums=(EnumDefinition("E", (EnumValue("A"),)),)).is_empty
    assert not SchemaModel(records=(RecordDefinition("R"),)).is_empty
