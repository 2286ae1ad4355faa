"""Tests for the schema parser adapter."""

import asyncio

import pytest

from prisma_extractor.codegen.core.parser import (
    SchemaNotFoundError,
    SchemaParseError,
    convert_datamodel,
    extract_schema,
    load_schema,
    parse_schema_text,
)
from prisma_extractor.codegen.core.schema import FieldKind


def test_load_schema_from_file(schema_file):
    model = load_schema(schema_file)

    assert [r.name for r in model.records] == ["User", "Post"]
    assert [e.name for e in model.enums] == ["Role"]
    assert model.find_record("Post").get_field("author").kind == FieldKind.OBJECT


def test_extract_schema_accepts_relative_path(schema_file, monkeypatch):
    monkeypatch.chdir(schema_file.parent.parent)
    model = asyncio.run(extract_schema("prisma/schema.prisma"))
    assert len(model.records) == 2


def test_missing_file_raises_not_found(tmp_path):
    missing = tmp_path / "nope.prisma"

    with pytest.raises(SchemaNotFoundError) as excinfo:
        load_schema(missing)

    assert str(missing.resolve()) in str(excinfo.value)


def test_directory_is_not_a_schema(tmp_path):
    with pytest.raises(SchemaNotFoundError):
        load_schema(tmp_path)


def test_invalid_schema_raises_parse_error(tmp_path):
    path = tmp_path / "schema.prisma"
    path.write_text("model User {\n  id Int\n  owner Nobody\n}\n", encoding="utf-8")

    with pytest.raises(SchemaParseError, match="line 3"):
        load_schema(path)


def test_parse_error_chains_engine_error():
    with pytest.raises(SchemaParseError) as excinfo:
        asyncio.run(parse_schema_text("model {"))

    assert excinfo.value.__cause__ is not None


def test_empty_schema_gives_empty_model():
    model = asyncio.run(parse_schema_text("// nothing here\n"))
    assert model.is_empty


def test_convert_datamodel_keeps_order_and_flags():
    datamodel = {
        "models": [
            {
                "name": "B",
                "fields": [
                    {
                        "name": "a",
                        "kind": "object",
                        "type": "A",
                        "isRequired": True,
                        "isList": False,
                        "relationName": "AB",
                    }
                ],
            },
            {"name": "A", "fields": []},
        ],
        "enums": [{"name": "E", "values": [{"name": "Y"}, {"name": "X"}]}],
    }

    model = convert_datamodel(datamodel)

    assert [r.name for r in model.records] == ["B", "A"]
    assert model.enums[0].value_names == ["Y", "X"]
    field = model.records[0].fields[0]
    assert field.is_relation
    assert field.relation_name == "AB"
    assert field.is_id is False
