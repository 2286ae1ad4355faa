"""
Prisma Extractor Code Generation Module

Generates TypeScript declarations and a metadata document from a Prisma
schema.
"""

import asyncio
from pathlib import Path
from typing import Optional, Union

from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import (
    SchemaModel,
    RecordDefinition,
    FieldDefinition,
    FieldKind,
    EnumDefinition,
    EnumValue,
)
from .core.parser import (
    SchemaError,
    SchemaNotFoundError,
    SchemaParseError,
    extract_schema,
    load_schema,
)
from .core.config import (
    GenerationConfig,
    ConfigError,
    ConfigIOError,
    ConfigValidationError,
    resolve_config,
    write_default_config,
)
from .languages.typescript import TypeScriptGenerator

__version__ = "0.1.0"


def emit(model: SchemaModel, config: Optional[GenerationConfig] = None) -> GenerationResult:
    """
    Emit TypeScript declarations for a parsed schema.

    Args:
        model: Parsed schema
        config: Resolved configuration; defaults when omitted

    Returns:
        GenerationResult with the source text, warnings and metadata document

    Raises:
        GeneratorError: If generation fails
    """
    result = generate_code(TypeScriptGenerator(config), model)
    if not result.success:
        raise GeneratorError(result.error_message) from result.exception
    return result


async def agenerate_from_schema(
    schema_path: Union[str, Path], config: Optional[GenerationConfig] = None
) -> GenerationResult:
    """Parse a schema file and emit declarations for it."""
    model = await extract_schema(schema_path)
    return emit(model, config)


def generate_from_schema(
    schema_path: Union[str, Path], config: Optional[GenerationConfig] = None
) -> GenerationResult:
    """
    Generate code from a schema file.

    Args:
        schema_path: Path to the Prisma schema
        config: Resolved configuration; defaults when omitted

    Returns:
        GenerationResult with generated code
    """
    return asyncio.run(agenerate_from_schema(schema_path, config))


__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "generate_code",
    "SchemaModel",
    "RecordDefinition",
    "FieldDefinition",
    "FieldKind",
    "EnumDefinition",
    "EnumValue",
    "SchemaError",
    "SchemaNotFoundError",
    "SchemaParseError",
    "extract_schema",
    "load_schema",
    "GenerationConfig",
    "ConfigError",
    "ConfigIOError",
    "ConfigValidationError",
    "resolve_config",
    "write_default_config",
    "TypeScriptGenerator",
    "emit",
    "agenerate_from_schema",
    "generate_from_schema",
]
