"""
Core schema representation for code generation.

Normalized, immutable view of a parsed Prisma schema that generators
work with, plus the metadata document shape exported next to the
generated code.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple
from enum import Enum


class FieldKind(Enum):
    """What a field's type name refers to."""

    SCALAR = "scalar"
    ENUM = "enum"
    OBJECT = "object"  # Relation to another record


# Built-in scalar keywords of the schema language
SCALAR_TYPES = (
    "String",
    "Int",
    "Float",
    "BigInt",
    "Boolean",
    "DateTime",
    "Json",
    "Decimal",
    "Bytes",
    "Unsupported",
)


@dataclass(frozen=True)
class FieldDefinition:
    """Represents a single field of a record."""

    name: str
    type: str  # Scalar keyword or the name of a record/enum
    kind: FieldKind = FieldKind.SCALAR
    is_required: bool = True
    is_list: bool = False
    is_id: bool = False
    is_unique: bool = False
    is_updated_at: bool = False
    has_default_value: bool = False
    relation_name: Optional[str] = None
    documentation: Optional[str] = None

    @property
    def is_relation(self) -> bool:
        """True when the field points at another record."""
        return self.kind == FieldKind.OBJECT

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the DMMF-style camelCase keys."""
        data: Dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "type": self.type,
            "isRequired": self.is_required,
            "isList": self.is_list,
            "isId": self.is_id,
            "isUnique": self.is_unique,
            "isUpdatedAt": self.is_updated_at,
            "hasDefaultValue": self.has_default_value,
            "relationName": self.relation_name,
        }
        if self.documentation is not None:
            data["documentation"] = self.documentation
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldDefinition":
        return cls(
            name=data["name"],
            type=data["type"],
            kind=FieldKind(data.get("kind", FieldKind.SCALAR.value)),
            is_required=data.get("isRequired", True),
            is_list=data.get("isList", False),
            is_id=data.get("isId", False),
            is_unique=data.get("isUnique", False),
            is_updated_at=data.get("isUpdatedAt", False),
            has_default_value=data.get("hasDefaultValue", False),
            relation_name=data.get("relationName"),
            documentation=data.get("documentation"),
        )


@dataclass(frozen=True)
class RecordDefinition:
    """A named composite type (a Prisma model or composite type)."""

    name: str
    fields: Tuple[FieldDefinition, ...] = ()
    documentation: Optional[str] = None

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        """Get field by name."""
        for record_field in self.fields:
            if record_field.name == name:
                return record_field
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.documentation is not None:
            data["documentation"] = self.documentation
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordDefinition":
        return cls(
            name=data["name"],
            fields=tuple(FieldDefinition.from_dict(f) for f in data.get("fields", [])),
            documentation=data.get("documentation"),
        )


@dataclass(frozen=True)
class EnumValue:
    """One variant of an enumeration."""

    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class EnumDefinition:
    """A named closed set of string-valued variants."""

    name: str
    values: Tuple[EnumValue, ...] = ()
    documentation: Optional[str] = None

    @property
    def value_names(self) -> List[str]:
        return [value.name for value in self.values]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "values": [v.to_dict() for v in self.values],
        }
        if self.documentation is not None:
            data["documentation"] = self.documentation
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnumDefinition":
        return cls(
            name=data["name"],
            values=tuple(EnumValue(name=v["name"]) for v in data.get("values", [])),
            documentation=data.get("documentation"),
        )


@dataclass(frozen=True)
class SchemaModel:
    """Root of a parsed schema: records and enums in declaration order."""

    records: Tuple[RecordDefinition, ...] = field(default_factory=tuple)
    enums: Tuple[EnumDefinition, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.records and not self.enums

    def names(self) -> Dict[str, FieldKind]:
        """
        Build the combined record + enum namespace.

        Returns:
            Dict mapping each declared type name to the kind a field
            referencing it would have. Enums win on a clash so the
            caller can report it.
        """
        namespace = {record.name: FieldKind.OBJECT for record in self.records}
        namespace.update({enum.name: FieldKind.ENUM for enum in self.enums})
        return namespace

    def find_record(self, name: str) -> Optional[RecordDefinition]:
        for record in self.records:
            if record.name == name:
                return record
        return None

    def find_enum(self, name: str) -> Optional[EnumDefinition]:
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None

    def kind_of(self, type_name: str) -> FieldKind:
        """Resolve what a type name refers to; unknown names are scalars."""
        return self.names().get(type_name, FieldKind.SCALAR)

    def to_dict(self) -> Dict[str, Any]:
        """Metadata document: the normalized model with stable key order."""
        return {
            "records": [record.to_dict() for record in self.records],
            "enums": [enum.to_dict() for enum in self.enums],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaModel":
        """Rebuild a model from a metadata document."""
        return cls(
            records=tuple(RecordDefinition.from_dict(r) for r in data.get("records", [])),
            enums=tuple(EnumDefinition.from_dict(e) for e in data.get("enums", [])),
        )
