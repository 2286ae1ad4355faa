"""Tests for TypeScript declaration emission."""

import pytest

from conftest import parse
from prisma_extractor.codegen import emit, generate_from_schema
from prisma_extractor.codegen.core.config import (
    EnumOutputKind,
    GenerationConfig,
    OutputKind,
    TypeMapping,
)
from prisma_extractor.codegen.core.generator import GeneratorError, generate_code
from prisma_extractor.codegen.core.schema import (
    EnumDefinition,
    EnumValue,
    FieldDefinition,
    FieldKind,
    RecordDefinition,
    SchemaModel,
)
from prisma_extractor.codegen.languages.typescript import (
    TypeScriptGenerator,
    TsTypeMapper,
    create_typescript_generator,
)

HEADER = (
    "// This file is auto-generated by prisma-extractor.\n"
    "// Do not edit this file directly.\n"
)


def test_enum_and_interface_with_default_config(role_user_model):
    result = emit(role_user_model, GenerationConfig())

    assert result.success
    assert result.warnings == []
    assert result.code == (
        HEADER
        + "\n"
        + "export enum Role {\n"
        + '  ADMIN = "ADMIN",\n'
        + '  USER = "USER",\n'
        + "}\n"
        + "\n"
        + "export interface User {\n"
        + "  id: number;\n"
        + "  email: string;\n"
        + "  role: Role;\n"
        + "}\n"
    )


def test_required_relation_is_optional_under_policy():
    model = parse(
        """
model User {
  id Int @id
}

model Post {
  id     Int  @id
  author User
}
"""
    )
    config = GenerationConfig(
        output_kind=OutputKind.TYPE, relation_fields_optional=True
    )

    code = emit(model, config).code

    assert model.find_record("Post").get_field("author").is_required
    assert "export type Post = {\n  id: number;\n  author?: User;\n}\n" in code


def test_relation_required_when_policy_disabled():
    model = parse(
        "model User {\n  id Int @id\n}\nmodel Post {\n  author User\n}\n"
    )
    config = GenerationConfig(relation_fields_optional=False)

    assert "  author: User;\n" in emit(model, config).code


def test_optionality_and_lists(blog_model):
    code = emit(blog_model).code

    assert "  name?: string;\n" in code
    assert "  email: string;\n" in code
    assert "  posts?: Post[];\n" in code
    assert "  tags: string[];\n" in code
    assert "  createdAt: Date;\n" in code
    assert "  role: Role;\n" in code


def test_documentation_comments(blog_model):
    code = emit(blog_model).code

    assert "/** Access level of a user */\nexport enum Role {\n" in code
    assert "export interface User {\n  /** Primary key */\n  id: number;\n" in code


def test_multiline_documentation():
    model = parse("/// First line\n/// Second line\nmodel Note {\n  id Int\n}\n")
    code = emit(model).code

    assert "/**\n * First line\n * Second line\n */\nexport interface Note {\n" in code


def test_enum_as_union_type(role_user_model):
    config = GenerationConfig(enum_output_kind=EnumOutputKind.UNION)

    code = emit(role_user_model, config).code

    assert 'export type Role = "ADMIN" | "USER";\n' in code
    assert "export enum" not in code


def test_empty_enum_union_is_never():
    model = SchemaModel(enums=(EnumDefinition("Nothing"),))
    config = GenerationConfig(enum_output_kind=EnumOutputKind.UNION)

    assert "export type Nothing = never;\n" in emit(model, config).code


def test_custom_type_mapping():
    model = parse("model Event {\n  at DateTime\n  size BigInt\n}\n")
    config = GenerationConfig(
        type_mapping=TypeMapping().merged_with({"DateTime": "string"})
    )

    code = emit(model, config).code

    assert "  at: string;\n" in code
    assert "  size: bigint;\n" in code


def test_unmapped_scalar_passes_through_with_warning():
    record = RecordDefinition("Shape", (FieldDefinition("area", "Geometry"),))
    result = emit(SchemaModel(records=(record,)))

    assert "  area: Geometry;\n" in result.code
    assert result.warnings == [
        "No type mapping for scalar 'Geometry' - emitted unchanged"
    ]


def test_empty_schema_emits_header_only():
    assert emit(SchemaModel()).code == HEADER


def test_blocks_separated_by_single_blank_line(blog_model):
    code = emit(blog_model).code

    assert "\n\n\n" not in code
    assert code.endswith("}\n")
    assert code.count("\n\n") == 3


def test_declaration_order_preserved():
    model = parse(
        "enum Z {\n  B\n  A\n}\nenum Y {\n  X\n}\n"
        "model Second {\n  id Int\n}\nmodel First {\n  id Int\n}\n"
    )
    code = emit(model).code

    assert code.index("enum Z") < code.index("enum Y")
    assert code.index("enum Y") < code.index("interface Second")
    assert code.index("interface Second") < code.index("interface First")
    assert code.index('B = "B"') < code.index('A = "A"')


def test_emission_is_deterministic(blog_model):
    config = GenerationConfig(output_kind=OutputKind.TYPE)
    assert emit(blog_model, config).code == emit(blog_model, config).code


def test_metadata_is_model_document(blog_model):
    assert emit(blog_model).metadata == blog_model.to_dict()


def test_reserved_and_builtin_names_are_reported():
    model = SchemaModel(
        records=(
            RecordDefinition("Date", (FieldDefinition("id", "Int"),)),
            RecordDefinition("Thing", (FieldDefinition("my-field", "String"),)),
        ),
        enums=(EnumDefinition("string", (EnumValue("A"),)),),
    )

    warnings = emit(model).warnings

    assert "Type name 'string' is a reserved word in TypeScript" in warnings
    assert "Type name 'Date' shadows a builtin type in TypeScript" in warnings
    assert "Field Thing.my-field is not a valid identifier in TypeScript" in warnings


def test_structural_problems_are_reported():
    model = SchemaModel(
        records=(
            RecordDefinition("Status"),
            RecordDefinition(
                "Order", (FieldDefinition("owner", "Customer", FieldKind.OBJECT),)
            ),
        ),
        enums=(EnumDefinition("Status", (EnumValue("OPEN"),)),),
    )

    warnings = emit(model).warnings

    assert "Name 'Status' is declared as both an enum and a record" in warnings
    assert "Record 'Status' has no fields" in warnings
    assert "Field Order.owner references undeclared type 'Customer'" in warnings


def test_missing_templates_fail_generation(monkeypatch, role_user_model):
    monkeypatch.setattr(TypeScriptGenerator, "get_template_directory", lambda self: None)

    result = generate_code(create_typescript_generator(), role_user_model)
    assert not result.success
    assert "template not found" in result.error_message

    with pytest.raises(GeneratorError):
        emit(role_user_model)


def test_generator_properties():
    generator = create_typescript_generator()

    assert generator.language_name == "typescript"
    assert generator.file_extension == ".ts"
    assert generator.config == GenerationConfig()


def test_generate_from_schema_file(schema_file):
    config = GenerationConfig(output_kind=OutputKind.TYPE)
    result = generate_from_schema(schema_file, config)

    assert result.success
    assert "export type Post = {\n" in result.code
    assert [r["name"] for r in result.metadata["records"]] == ["User", "Post"]


def test_blank_mapping_falls_back_to_schema_type():
    model = parse("model A {\n  id Int\n  note String\n}\n")
    config = GenerationConfig(
        type_mapping=TypeMapping().merged_with({"Int": "", "String": " "})
    )

    result = emit(model, config)

    assert "export interface A {\n  id: Int;\n  note: String;\n}\n" in result.code
    assert ": ;" not in result.code
    assert "No type mapping for scalar 'Int' - emitted unchanged" in result.warnings


def test_mapped_flag_on_ts_types():
    mapper = TsTypeMapper(GenerationConfig())

    mapped = mapper.map_field_type(FieldDefinition("id", "Int"))
    unmapped = mapper.map_field_type(FieldDefinition("shape", "Geometry"))
    relation = mapper.map_field_type(FieldDefinition("owner", "User", FieldKind.OBJECT))

    assert mapped.is_mapped and mapped.validation_hints == []
    assert not unmapped.is_mapped and len(unmapped.validation_hints) == 1
    assert not relation.is_mapped and relation.validation_hints == []
