"""
Base generator interface for all code generation targets.

Defines the contract that language generators implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GenerationConfig
from .schema import FieldKind, SchemaModel
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GenerationConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GenerationConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, model: SchemaModel) -> str:
        """
        Generate code for the whole schema.

        Args:
            model: Parsed schema

        Returns:
            Generated code as a string
        """
        pass

    def validate_schema(self, model: SchemaModel) -> List[str]:
        """
        Report structural issues that generation won't fix on its own.

        Language generators extend this with language-specific checks.

        Args:
            model: Schema to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        declared: Dict[str, str] = {}
        for label, name in [("an enum", e.name) for e in model.enums] + [
            ("a record", r.name) for r in model.records
        ]:
            if name not in declared:
                declared[name] = label
            elif declared[name] == label:
                warnings.append(f"Name '{name}' is declared more than once")
            else:
                warnings.append(
                    f"Name '{name}' is declared as both {declared[name]} and {label}"
                )

        for record in model.records:
            if not record.fields:
                warnings.append(f"Record '{record.name}' has no fields")

        namespace = model.names()
        for record in model.records:
            for record_field in record.fields:
                if record_field.kind == FieldKind.SCALAR:
                    continue
                if record_field.type not in namespace:
                    warnings.append(
                        f"Field {record.name}.{record_field.name} references "
                        f"undeclared type '{record_field.type}'"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = [line.rstrip() for line in code.split("\n")]
        return "\n".join(lines).rstrip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generated code, warnings and the metadata document."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Reportable conditions found during generation
            metadata: The normalized model as a metadata document
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, model: SchemaModel) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        model: Schema to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_schema(model)
        if warnings:
            logger.info("Schema validation produced %d warning(s)", len(warnings))

        code = generator.format_code(generator.generate(model))

        return GenerationResult(code, warnings, model.to_dict())

    except (GeneratorError, TemplateError) as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
