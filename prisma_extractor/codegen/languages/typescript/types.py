"""
TypeScript type system for code generation.

Maps schema fields to TypeScript property types under the configured
type mapping and optionality policy.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ...core.config import GenerationConfig
from ...core.schema import FieldDefinition, FieldKind


@dataclass(frozen=True)
class TsType:
    """
    Immutable representation of a TypeScript property type.

    Carries everything the templates need to render one property line.
    """

    name: str  # Element type name (e.g., "string", "User")
    is_list: bool = False
    is_optional: bool = False
    is_mapped: bool = False  # Name came from the type mapping table
    validation_hints: List[str] = field(default_factory=list)

    @property
    def annotation(self) -> str:
        """Type as written after the colon."""
        return f"{self.name}[]" if self.is_list else self.name

    @property
    def optional_marker(self) -> str:
        return "?" if self.is_optional else ""


class TsTypeMapper:
    """
    Central engine for mapping schema fields to TypeScript types.

    Scalars go through the configured type mapping, enum and relation
    fields use the referenced type's own name.
    """

    def __init__(self, config: Optional[GenerationConfig] = None):
        """Initialize with generation configuration."""
        self.config = config or GenerationConfig()

    def map_field_type(self, schema_field: FieldDefinition) -> TsType:
        """
        Map a schema field to a TypeScript type.

        Args:
            schema_field: The field to map

        Returns:
            TsType with name, list and optional flags resolved
        """
        name, is_mapped = self.resolve_type_name(schema_field)
        ts_type = TsType(
            name=name,
            is_list=schema_field.is_list,
            is_optional=self.is_optional(schema_field),
            is_mapped=is_mapped,
        )

        if schema_field.kind == FieldKind.SCALAR and not ts_type.is_mapped:
            ts_type.validation_hints.append(
                f"No type mapping for scalar '{schema_field.type}' - "
                "emitted unchanged"
            )
        return ts_type

    def resolve_type_name(self, schema_field: FieldDefinition):
        """
        Resolve the element type name of a field.

        Returns:
            Tuple of (type name, whether the mapping table supplied it)
        """
        if schema_field.kind != FieldKind.SCALAR:
            return schema_field.type, False

        mapped = self.config.type_mapping.get(schema_field.type)
        if mapped is None or not mapped.strip():
            # Unknown or blank mappings pass through unchanged
            return schema_field.type, False
        return mapped, True

    def is_optional(self, schema_field: FieldDefinition) -> bool:
        """A field is optional when not required, or when it is a relation and
        relation fields are configured optional."""
        if not schema_field.is_required:
            return True
        return schema_field.is_relation and self.config.relation_fields_optional

    def get_validation_summary(self, types: List[TsType]) -> List[str]:
        """Get all validation hints from a list of types."""
        all_hints = []
        for ts_type in types:
            all_hints.extend(ts_type.validation_hints)
        return all_hints
