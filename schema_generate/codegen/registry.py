"""
Generator registry.

Maps language names and their aliases to generator classes and builds
configured generator instances on request.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path

from ..logging_config import get_logger
from .core.generator import CodeGenerator
from .core.config import ConfigError, GeneratorConfig, load_config

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Language name -> generator class, with case-insensitive aliases."""

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator under a primary name and optional aliases.

        An already registered language is left alone unless ``replace`` is
        set. Aliases may not shadow a primary name or another language's
        alias.

        Raises:
            RegistryError: If generator_class is not a CodeGenerator or an
                alias conflicts
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        primary = language.lower()
        if primary in self._generators and not replace:
            return

        self._generators[primary] = generator_class
        logger.debug("Registered %s generator %s", primary, generator_class.__name__)

        for alias in aliases or []:
            self._bind_alias(alias.lower(), primary, replace)

    def _bind_alias(self, alias: str, primary: str, replace: bool):
        if alias == primary:
            return
        if not replace:
            if alias in self._generators:
                raise RegistryError(
                    f"Alias '{alias}' conflicts with existing primary language"
                )
            bound = self._aliases.get(alias, primary)
            if bound != primary:
                raise RegistryError(f"Alias '{alias}' already points to '{bound}'")
        self._aliases[alias] = primary

    def unregister(self, language: str):
        """Drop a language together with every alias bound to it."""
        primary = language.lower()
        self._generators.pop(primary, None)
        self._aliases = {a: p for a, p in self._aliases.items() if p != primary}

    def resolve_language(self, language: str) -> str:
        """
        Map a language name or alias to its primary name.

        Raises:
            RegistryError: If language not found
        """
        key = language.lower()
        if key in self._generators:
            return key
        if key in self._aliases:
            return self._aliases[key]
        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self._generators[self.resolve_language(language)]

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Create a configured generator.

        ``config`` may be a ready GeneratorConfig, a dict of overrides, a
        path to a JSON config file, or None for the language defaults.

        Raises:
            RegistryError: If the language is unknown or the config is unusable
        """
        primary = self.resolve_language(language)
        return self._generators[primary](self._resolve_config(primary, config))

    def _resolve_config(self, primary: str, config: ConfigSource) -> GeneratorConfig:
        if isinstance(config, GeneratorConfig):
            return config
        if config is not None and not isinstance(config, (dict, str, Path)):
            raise RegistryError(f"Invalid config type: {type(config)}")

        try:
            if isinstance(config, dict):
                return load_config(primary, custom_config=config)
            return load_config(primary, config_file=config)
        except ConfigError as e:
            raise RegistryError(f"Failed to create {primary} generator: {e}") from e

    def list_languages(self) -> List[str]:
        """Registered primary names, sorted."""
        return sorted(self._generators)

    def get_aliases_for_language(self, language: str) -> List[str]:
        primary = language.lower()
        return sorted(a for a, p in self._aliases.items() if p == primary)

    def is_supported(self, language: str) -> bool:
        key = language.lower()
        return key in self._generators or key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a registered language using a default-configured generator.

        Raises:
            RegistryError: If language not found
        """
        primary = self.resolve_language(language)
        generator = self.create_generator(primary)
        generator_class = type(generator)
        return {
            "name": generator.language_name,
            "class": generator_class.__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(primary),
            "module": generator_class.__module__,
            "config": generator.config,
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """The process-wide registry, with built-in generators registered."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _register_builtin_generators(_global_registry)
    return _global_registry


def _register_builtin_generators(registry: GeneratorRegistry):
    from .languages.go import GoGenerator

    registry.register("go", GoGenerator, aliases=["golang"])


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str, config: ConfigSource = None) -> CodeGenerator:
    """Configured generator for a language from the global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Language info for every registered primary name."""
    return {language: get_language_info(language) for language in list_supported_languages()}
