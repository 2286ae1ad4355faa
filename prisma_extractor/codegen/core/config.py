"""
Configuration management for code generation.

Handles loading the optional ``prisma-extractor.json`` document, merging it
over the built-in defaults and validating the result before any code is
generated.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Any, Iterator, List, Mapping, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAME = "prisma-extractor.json"
CONFIG_SCHEMA_FILENAME = "prisma-extractor.schema.json"

# Resolved relative to the config document, which is written next to it
DEFAULT_SCHEMA_URL = f"./{CONFIG_SCHEMA_FILENAME}"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class ConfigIOError(ConfigError):
    """Configuration file could not be read, written, or decoded."""

    pass


class ViolationKind(Enum):
    """Kinds of problems a configuration document can have."""

    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    UNEXPECTED_KEY = "unexpected_key"


@dataclass(frozen=True)
class ConfigViolation:
    """A single validation problem in a configuration document."""

    kind: ViolationKind
    key: str
    message: str

    def __str__(self) -> str:
        return self.message


class ConfigValidationError(ConfigError):
    """Configuration document is well-formed but invalid."""

    def __init__(self, violations: List[ConfigViolation]):
        self.violations = list(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid configuration: {details}")


class OutputKind(Enum):
    """How records are declared in the generated code."""

    INTERFACE = "interface"
    TYPE = "type"


class EnumOutputKind(Enum):
    """How enums are declared in the generated code."""

    ENUM = "enum"
    UNION = "type"


DEFAULT_TYPE_MAPPINGS: Dict[str, str] = {
    "String": "string",
    "Int": "number",
    "Float": "number",
    "BigInt": "bigint",
    "Boolean": "boolean",
    "DateTime": "Date",
    "Json": "string",
    "Decimal": "number",
    "Bytes": "Buffer",
    "Unsupported": "unknown",
}


@dataclass(frozen=True)
class TypeMapping:
    """
    Immutable scalar-name to target-type-name table.

    Merging is per key: entries given to :meth:`merged_with` replace the
    entry of the same key and every other key is kept.
    """

    entries: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_TYPE_MAPPINGS))
    )

    def __post_init__(self):
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def get(self, scalar_type: str) -> Optional[str]:
        return self.entries.get(scalar_type)

    def merged_with(self, overrides: Mapping[str, str]) -> "TypeMapping":
        merged = dict(self.entries)
        merged.update(overrides)
        return TypeMapping(merged)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.entries)

    def __contains__(self, scalar_type: object) -> bool:
        return scalar_type in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class GenerationConfig:
    """Resolved generation policy for one run."""

    # Declaration styles
    output_kind: OutputKind = OutputKind.INTERFACE
    enum_output_kind: EnumOutputKind = EnumOutputKind.ENUM

    # Type handling
    type_mapping: TypeMapping = field(default_factory=TypeMapping)

    # Mark relation fields optional so the types can double as request bodies
    relation_fields_optional: bool = True

    # Output settings
    generate_metadata: bool = False
    output_file: str = "./src/interfaces/database.ts"
    prisma_schema: str = "./prisma/schema.prisma"
    schema_url: str = DEFAULT_SCHEMA_URL

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the on-disk configuration document shape."""
        return {
            "$schema": self.schema_url,
            "outputType": self.output_kind.value,
            "enumOutputType": self.enum_output_kind.value,
            "outputFile": self.output_file,
            "prismaSchema": self.prisma_schema,
            "generateMetadata": self.generate_metadata,
            "relationFieldsOptional": self.relation_fields_optional,
            "mapTypes": self.type_mapping.to_dict(),
        }


# Document key -> GenerationConfig attribute
DOCUMENT_KEYS = {
    "$schema": "schema_url",
    "outputType": "output_kind",
    "enumOutputType": "enum_output_kind",
    "outputFile": "output_file",
    "prismaSchema": "prisma_schema",
    "generateMetadata": "generate_metadata",
    "relationFieldsOptional": "relation_fields_optional",
    "mapTypes": "type_mapping",
}

_CHOICES = {
    "outputType": [kind.value for kind in OutputKind],
    "enumOutputType": [kind.value for kind in EnumOutputKind],
}
_BOOLEAN_KEYS = ("generateMetadata", "relationFieldsOptional")
_STRING_KEYS = ("outputFile", "prismaSchema", "$schema")


def validate_config_document(document: Any) -> List[ConfigViolation]:
    """
    Check a configuration document against the closed key set.

    Every problem is collected; nothing stops at the first one.

    Args:
        document: Decoded JSON document

    Returns:
        List of violations (empty when the document is valid)
    """
    if not isinstance(document, dict):
        return [
            ConfigViolation(
                ViolationKind.INVALID_TYPE,
                "",
                "Configuration must be a JSON object.",
            )
        ]

    violations = []

    if "mapTypes" in document:
        map_types = document["mapTypes"]
        if not isinstance(map_types, dict):
            violations.append(
                ConfigViolation(
                    ViolationKind.INVALID_TYPE,
                    "mapTypes",
                    "mapTypes must be an object.",
                )
            )
        else:
            for key, value in map_types.items():
                if not isinstance(value, str):
                    violations.append(
                        ConfigViolation(
                            ViolationKind.INVALID_TYPE,
                            f"mapTypes.{key}",
                            f"mapTypes.{key} must be a string.",
                        )
                    )
                elif not value.strip():
                    violations.append(
                        ConfigViolation(
                            ViolationKind.INVALID_VALUE,
                            f"mapTypes.{key}",
                            f"mapTypes.{key} must be a non-empty string.",
                        )
                    )

    for key, choices in _CHOICES.items():
        if key not in document:
            continue
        value = document[key]
        if not isinstance(value, str):
            violations.append(
                ConfigViolation(
                    ViolationKind.INVALID_TYPE, key, f"{key} must be a string."
                )
            )
        elif value not in choices:
            violations.append(
                ConfigViolation(
                    ViolationKind.INVALID_VALUE,
                    key,
                    f"{key} must be one of the following: {', '.join(choices)}.",
                )
            )

    for key in _BOOLEAN_KEYS:
        if key in document and not isinstance(document[key], bool):
            violations.append(
                ConfigViolation(
                    ViolationKind.INVALID_TYPE,
                    key,
                    f"{key} must be a boolean if provided.",
                )
            )

    for key in _STRING_KEYS:
        if key in document and not isinstance(document[key], str):
            violations.append(
                ConfigViolation(
                    ViolationKind.INVALID_TYPE, key, f"{key} must be a string."
                )
            )

    for key in document:
        if key not in DOCUMENT_KEYS:
            violations.append(
                ConfigViolation(
                    ViolationKind.UNEXPECTED_KEY, key, f"Unexpected property: {key}."
                )
            )

    return violations


def config_json_schema() -> Dict[str, Any]:
    """JSON Schema for the configuration document, for editor validation."""
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "prisma-extractor configuration",
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "$schema": {"type": "string"},
            "outputType": {"type": "string", "enum": _CHOICES["outputType"]},
            "enumOutputType": {"type": "string", "enum": _CHOICES["enumOutputType"]},
            "outputFile": {"type": "string"},
            "prismaSchema": {"type": "string"},
            "generateMetadata": {"type": "boolean"},
            "relationFieldsOptional": {"type": "boolean"},
            "mapTypes": {
                "type": "object",
                "additionalProperties": {"type": "string", "minLength": 1},
            },
        },
    }


class ConfigManager:
    """Resolves GenerationConfig from defaults and an optional document."""

    def __init__(self, defaults: Optional[GenerationConfig] = None):
        self.defaults = defaults or GenerationConfig()

    def default_path(self) -> Path:
        """Conventional config location in the working directory."""
        return Path.cwd() / DEFAULT_CONFIG_FILENAME

    def resolve(self, config_path: Optional[Union[str, Path]] = None) -> GenerationConfig:
        """
        Build the configuration for one run.

        Args:
            config_path: Path to a JSON configuration file. The conventional
                location is used when omitted.

        Returns:
            Validated, immutable configuration

        Raises:
            ConfigIOError: If the file exists but can't be read or decoded
            ConfigValidationError: If the document is invalid
        """
        path = Path(config_path) if config_path else self.default_path()

        if not path.exists():
            if config_path:
                logger.warning("Configuration file not found, using defaults: %s", path)
            else:
                logger.debug("No configuration file at %s, using defaults", path)
            return self.defaults

        document = self._load_config_file(path)

        violations = validate_config_document(document)
        if violations:
            logger.error(
                "Configuration %s has %d problem(s)", path, len(violations)
            )
            raise ConfigValidationError(violations)

        config = self._merge(document)
        logger.info("Loaded configuration from %s", path)
        return config

    def _load_config_file(self, path: Path) -> Any:
        """Load a configuration document from a JSON file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigIOError(
                f"Invalid JSON in configuration file {path}: {e}"
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigIOError(
                f"Failed to load configuration file {path}: {e}"
            ) from e

    def _merge(self, document: Dict[str, Any]) -> GenerationConfig:
        """Overlay a validated document on the defaults."""
        base = self.defaults
        return GenerationConfig(
            output_kind=OutputKind(document.get("outputType", base.output_kind.value)),
            enum_output_kind=EnumOutputKind(
                document.get("enumOutputType", base.enum_output_kind.value)
            ),
            type_mapping=base.type_mapping.merged_with(document.get("mapTypes", {})),
            relation_fields_optional=document.get(
                "relationFieldsOptional", base.relation_fields_optional
            ),
            generate_metadata=document.get("generateMetadata", base.generate_metadata),
            output_file=document.get("outputFile", base.output_file),
            prisma_schema=document.get("prismaSchema", base.prisma_schema),
            schema_url=document.get("$schema", base.schema_url),
        )

    def save_config(self, config: GenerationConfig, output_path: Union[str, Path]) -> Path:
        """Save configuration to a JSON file, replacing any existing one."""
        path = Path(output_path)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config.to_document(), f, indent=2, ensure_ascii=False)
                f.write("\n")
        except OSError as e:
            raise ConfigIOError(f"Failed to save configuration to {path}: {e}") from e

        logger.info("Configuration file written to %s", path)
        return path

    def save_schema(self, output_path: Union[str, Path]) -> Path:
        """Save the configuration JSON Schema, replacing any existing one."""
        path = Path(output_path)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_json_schema(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise ConfigIOError(f"Failed to save configuration schema to {path}: {e}") from e

        logger.info("Configuration schema written to %s", path)
        return path


def default_config_document() -> Dict[str, Any]:
    """The built-in defaults as a configuration document."""
    return GenerationConfig().to_document()


def resolve_config(config_path: Optional[Union[str, Path]] = None) -> GenerationConfig:
    """
    Convenience function to resolve configuration.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Merged and validated configuration
    """
    return ConfigManager().resolve(config_path)


def write_default_config(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Write the default configuration document for users to customize.

    The JSON Schema its ``$schema`` key points at is written next to it.

    Args:
        path: Target file; the conventional location when omitted

    Returns:
        Path of the configuration document
    """
    manager = ConfigManager()
    config_path = manager.save_config(manager.defaults, path or manager.default_path())
    manager.save_schema(config_path.parent / CONFIG_SCHEMA_FILENAME)
    return config_path
