"""
schema-generate code generation module

Generates JSON (de)serialization code from a record/field/alias model.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.schema import Field, Record, SchemaModel, ordered_names
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config

__version__ = "0.1.0"


def generate_from_model(model, language="go", config=None):
    """
    Generate code for a schema model.

    Args:
        model: SchemaModel built by schema_generate.loader
        language: Target language name
        config: Generator configuration dict, path or GeneratorConfig

    Returns:
        GenerationResult with generated code
    """
    generator = get_generator(language, config)
    return generate_code(generator, model)


def quick_generate(document, language="go", **options):
    """
    Quick code generation from a model document.

    Args:
        document: Model document (dict or JSON string)
        language: Target language
        **options: Generator options

    Returns:
        Generated code string
    """
    from schema_generate.loader import model_from_dict

    if isinstance(document, str):
        import json

        document = json.loads(document)

    model = model_from_dict(document)
    result = generate_from_model(model, language, options)

    if result.success:
        return result.code
    raise GeneratorError(f"Code generation failed: {result.error_message}")


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    "Field",
    "Record",
    "SchemaModel",
    "ordered_names",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "generate_from_model",
    "quick_generate",
    "get_generator",
    "get_language_info",
    "get_registry",
    "list_all_language_info",
    "list_supported_languages",
]
