"""
Schema parser adapter.

Reads a schema file, hands its text to the grammar engine and converts the
engine's native datamodel into a :class:`SchemaModel`.
"""

import asyncio
from pathlib import Path
from typing import Dict, Any, Union

from ...logging_config import get_logger
from .grammar import DatamodelError, get_datamodel
from .schema import (
    EnumDefinition,
    EnumValue,
    FieldDefinition,
    FieldKind,
    RecordDefinition,
    SchemaModel,
)

logger = get_logger(__name__)


class SchemaError(Exception):
    """Base exception for schema loading errors."""

    pass


class SchemaNotFoundError(SchemaError):
    """The schema path does not resolve to a readable file."""

    pass


class SchemaParseError(SchemaError):
    """The grammar engine rejected the schema text."""

    pass


def convert_datamodel(datamodel: Dict[str, Any]) -> SchemaModel:
    """
    Convert the engine's datamodel to the internal SchemaModel.

    Declaration order is kept as-is; nothing is reordered or deduplicated.

    Args:
        datamodel: Dict with ``models`` and ``enums`` lists

    Returns:
        Normalized SchemaModel
    """

    def convert_field(data: Dict[str, Any]) -> FieldDefinition:
        return FieldDefinition(
            name=data["name"],
            type=data["type"],
            kind=FieldKind(data["kind"]),
            is_required=data["isRequired"],
            is_list=data["isList"],
            is_id=data.get("isId", False),
            is_unique=data.get("isUnique", False),
            is_updated_at=data.get("isUpdatedAt", False),
            has_default_value=data.get("hasDefaultValue", False),
            relation_name=data.get("relationName"),
            documentation=data.get("documentation"),
        )

    records = tuple(
        RecordDefinition(
            name=model["name"],
            fields=tuple(convert_field(f) for f in model["fields"]),
            documentation=model.get("documentation"),
        )
        for model in datamodel.get("models", [])
    )
    enums = tuple(
        EnumDefinition(
            name=enum["name"],
            values=tuple(EnumValue(name=v["name"]) for v in enum["values"]),
            documentation=enum.get("documentation"),
        )
        for enum in datamodel.get("enums", [])
    )

    return SchemaModel(records=records, enums=enums)


async def parse_schema_text(schema_text: str) -> SchemaModel:
    """
    Parse schema text held in memory.

    Raises:
        SchemaParseError: With the engine's diagnostic as the message
    """
    try:
        datamodel = await get_datamodel(schema_text)
    except DatamodelError as e:
        logger.error("Schema parsing failed: %s", e)
        raise SchemaParseError(str(e)) from e

    return convert_datamodel(datamodel)


async def extract_schema(schema_path: Union[str, Path]) -> SchemaModel:
    """
    Extract records and enums from a schema file.

    Args:
        schema_path: Absolute or relative path to the schema file

    Returns:
        Normalized SchemaModel

    Raises:
        SchemaNotFoundError: If the file does not exist or can't be read
        SchemaParseError: If the schema text is invalid
    """
    resolved_path = Path(schema_path).resolve()
    logger.debug("Reading schema from %s", resolved_path)

    if not resolved_path.is_file():
        logger.error("Schema file not found: %s", resolved_path)
        raise SchemaNotFoundError(f"Schema file not found at: {resolved_path}")

    try:
        schema_text = resolved_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading schema file %s: %s", resolved_path, e)
        raise SchemaNotFoundError(
            f"Schema file could not be read at: {resolved_path}: {e}"
        ) from e

    model = await parse_schema_text(schema_text)
    logger.info(
        "Extracted %d records and %d enums from %s",
        len(model.records),
        len(model.enums),
        resolved_path,
    )
    return model


def load_schema(schema_path: Union[str, Path]) -> SchemaModel:
    """Synchronous wrapper around :func:`extract_schema`."""
    return asyncio.run(extract_schema(schema_path))
