"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    Field,
    Record,
    SchemaModel,
    ordered_names,
    OMIT_NAME,
    ADDITIONAL_DISALLOWED,
    ADDITIONAL_NONE,
    ADDITIONAL_PROPERTIES_FIELD,
)
from .naming import NameSanitizer, InvalidIdentifierError
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Model - core data structures
    "Field",
    "Record",
    "SchemaModel",
    "ordered_names",
    "OMIT_NAME",
    "ADDITIONAL_DISALLOWED",
    "ADDITIONAL_NONE",
    "ADDITIONAL_PROPERTIES_FIELD",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "InvalidIdentifierError",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
