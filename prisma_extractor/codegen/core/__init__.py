"""
Core code generation components.

Provides the schema model, parser adapter, configuration and the base
generator used by the language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    SchemaModel,
    RecordDefinition,
    FieldDefinition,
    FieldKind,
    EnumDefinition,
    EnumValue,
    SCALAR_TYPES,
)
from .grammar import DatamodelError, parse_datamodel, get_datamodel
from .parser import (
    SchemaError,
    SchemaNotFoundError,
    SchemaParseError,
    convert_datamodel,
    parse_schema_text,
    extract_schema,
    load_schema,
)
from .naming import NameSanitizer
from .config import (
    GenerationConfig,
    TypeMapping,
    OutputKind,
    EnumOutputKind,
    ConfigManager,
    ConfigError,
    ConfigIOError,
    ConfigValidationError,
    ConfigViolation,
    ViolationKind,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_TYPE_MAPPINGS,
    CONFIG_SCHEMA_FILENAME,
    DEFAULT_SCHEMA_URL,
    config_json_schema,
    default_config_document,
    resolve_config,
    validate_config_document,
    write_default_config,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema model
    "SchemaModel",
    "RecordDefinition",
    "FieldDefinition",
    "FieldKind",
    "EnumDefinition",
    "EnumValue",
    "SCALAR_TYPES",
    # Grammar engine and parser adapter
    "DatamodelError",
    "parse_datamodel",
    "get_datamodel",
    "SchemaError",
    "SchemaNotFoundError",
    "SchemaParseError",
    "convert_datamodel",
    "parse_schema_text",
    "extract_schema",
    "load_schema",
    # Naming
    "NameSanitizer",
    # Configuration system
    "GenerationConfig",
    "TypeMapping",
    "OutputKind",
    "EnumOutputKind",
    "ConfigManager",
    "ConfigError",
    "ConfigIOError",
    "ConfigValidationError",
    "ConfigViolation",
    "ViolationKind",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_TYPE_MAPPINGS",
    "CONFIG_SCHEMA_FILENAME",
    "DEFAULT_SCHEMA_URL",
    "config_json_schema",
    "default_config_document",
    "resolve_config",
    "validate_config_document",
    "write_default_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
