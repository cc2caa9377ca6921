"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Union
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .schema import SchemaModel
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize generator with optional configuration."""
        if isinstance(config, GeneratorConfig):
            self.config = config
        else:
            self.config = load_config(self.language_name, custom_config=config)
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()
        self.register_template_filters(self._template_engine)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    def register_template_filters(self, engine: TemplateEngine) -> None:
        """Hook for language-specific escaping filters."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, model: SchemaModel) -> str:
        """
        Generate code for the whole model.

        Args:
            model: Records and aliases to generate code for

        Returns:
            Generated code as a string
        """
        pass

    def validate_schemas(self, model: SchemaModel) -> List[str]:
        """
        Validate the model for basic structural issues.

        Language generators should override this to add language-specific
        validation. Validation never raises; it only reports.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for record in model.ordered_records():
            if not record.fields:
                warnings.append(f"Record '{record.name}' has no fields")

            for field in record.ordered_fields():
                if field.required and not field.is_unmarshaled:
                    warnings.append(
                        f"Required field {record.name}.{field.name} is never read "
                        f"from JSON - no presence check will be generated"
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
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(
        cls,
        message: str,
        exception: Exception = None,
        warnings: List[str] = None,
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="", warnings=warnings)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, model: SchemaModel) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        model: Records and aliases to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    warnings = generator.validate_schemas(model)
    for warning in warnings:
        logger.warning(warning)

    try:
        code = generator.generate(model)
    except GeneratorError as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(
            f"Code generation failed: {e}", exception=e, warnings=warnings
        )

    formatted_code = generator.format_code(code)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "package_name": generator.config.package_name,
        **model.get_attention_summary(),
    }
    logger.info(
        "Generated %s code for %d record(s)",
        generator.language_name,
        metadata["records"],
    )

    return GenerationResult(formatted_code, warnings, metadata)
