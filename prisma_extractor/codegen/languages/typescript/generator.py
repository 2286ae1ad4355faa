"""
TypeScript code generator implementation.

Generates TypeScript enums/union types and interfaces/type aliases from a
parsed Prisma schema.
"""

from typing import Dict, List, Optional, Any
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import EnumOutputKind, GenerationConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.schema import EnumDefinition, RecordDefinition, SchemaModel
from .naming import create_typescript_sanitizer
from .types import TsType, TsTypeMapper

logger = get_logger(__name__)

TOOL_NAME = "prisma-extractor"

REQUIRED_TEMPLATES = ("header.ts.j2", "enum.ts.j2", "union.ts.j2", "record.ts.j2")


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript declarations."""

    def __init__(self, config: Optional[GenerationConfig] = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)

        self.sanitizer = create_typescript_sanitizer()
        self.type_mapper = TsTypeMapper(self.config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the TypeScript templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def generate(self, model: SchemaModel) -> str:
        """Generate the complete file: header, enums, then records."""
        for template_name in REQUIRED_TEMPLATES:
            if not self.template_exists(template_name):
                raise GeneratorError(f"{template_name} template not found")

        blocks = [self.render_template("header.ts.j2", {"tool_name": TOOL_NAME})]
        blocks.extend(self.generate_enum(enum) for enum in model.enums)
        blocks.extend(self.generate_record(record) for record in model.records)

        logger.debug(
            "Rendered %d enum and %d record blocks",
            len(model.enums),
            len(model.records),
        )
        return "\n\n".join(block.strip("\n") for block in blocks) + "\n"

    def generate_enum(self, enum: EnumDefinition) -> str:
        """Render one enum as a native enum or a string-literal union."""
        template_name = (
            "enum.ts.j2"
            if self.config.enum_output_kind == EnumOutputKind.ENUM
            else "union.ts.j2"
        )
        context = {
            "name": enum.name,
            "values": enum.value_names,
            "documentation": enum.documentation,
        }
        return self.render_template(template_name, context)

    def generate_record(self, record: RecordDefinition) -> str:
        """Render one record as an interface or a type alias."""
        context = {
            "name": record.name,
            "output_kind": self.config.output_kind.value,
            "documentation": record.documentation,
            "fields": [self._generate_field_data(f) for f in record.fields],
        }
        return self.render_template("record.ts.j2", context)

    def _generate_field_data(self, schema_field) -> Dict[str, Any]:
        """Generate field data for the record template."""
        ts_type = self.type_mapper.map_field_type(schema_field)
        return {
            "name": schema_field.name,
            "annotation": ts_type.annotation,
            "optional_marker": ts_type.optional_marker,
            "documentation": schema_field.documentation,
        }

    def validate_schema(self, model: SchemaModel) -> List[str]:
        """Validate schema names and types for TypeScript output."""
        warnings = super().validate_schema(model)

        declared = [enum.name for enum in model.enums]
        declared.extend(record.name for record in model.records)
        for name in declared:
            problem = self.sanitizer.type_name_problem(name)
            if problem:
                warnings.append(f"Type name '{name}' {problem} in TypeScript")

        ts_types: List[TsType] = []
        for record in model.records:
            for record_field in record.fields:
                problem = self.sanitizer.field_name_problem(record_field.name)
                if problem:
                    warnings.append(
                        f"Field {record.name}.{record_field.name} {problem} in TypeScript"
                    )
                ts_types.append(self.type_mapper.map_field_type(record_field))

        for hint in self.type_mapper.get_validation_summary(ts_types):
            if hint not in warnings:
                warnings.append(hint)

        return warnings


def create_typescript_generator(
    config: Optional[GenerationConfig] = None,
) -> TypeScriptGenerator:
    """Create a TypeScript generator, with defaults when no config is given."""
    return TypeScriptGenerator(config or GenerationConfig())
