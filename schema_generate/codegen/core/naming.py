"""
Naming utilities for safe code generation.

Handles name sanitization, case conversions, keyword conflicts and
identifier validation for generated source.
"""

import re
from typing import Set, Dict

from .generator import GeneratorError


class InvalidIdentifierError(GeneratorError):
    """Raised when a model name cannot be emitted as an identifier."""

    pass


# Unicode letter or underscore, then letters, digits or underscores
_IDENTIFIER_RE = re.compile(r"^[^\W\d]\w*$")


def is_identifier(name: str) -> bool:
    """Check identifier shape without consulting any keyword list."""
    return bool(_IDENTIFIER_RE.match(name or ""))


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def validate_identifier(self, name: str) -> str:
        """
        Return name unchanged if it is safe to emit verbatim.

        Raises:
            InvalidIdentifierError: For non-identifiers and reserved words
        """
        if not is_identifier(name):
            raise InvalidIdentifierError(f"{name!r} is not a valid identifier")
        if name in self.reserved_words:
            raise InvalidIdentifierError(f"{name!r} is a reserved word")
        return name

    def sanitize_name(self, name: str, suffix_on_conflict: str = "_") -> str:
        """
        Turn an arbitrary key into an exported PascalCase identifier.

        Args:
            name: Original name to sanitize
            suffix_on_conflict: Suffix to add for reserved words

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._to_pascal_case(cleaned)
        if converted[0].isdigit():
            converted = f"X{converted}"
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        # Remove non-alphanumeric chars except underscore and hyphen
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name)

        cleaned = cleaned.strip("_-")

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _split_words(self, name: str) -> str:
        """Lowercase name with words separated by underscores."""
        name = name.replace("-", "_")
        name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
        name = name.lower()
        name = re.sub(r"_+", "_", name)
        return name.strip("_")

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        parts = self._split_words(name).split("_")
        return "".join(part.capitalize() for part in parts if part)

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name.lower() in self.reserved_words or name.lower() in self.builtin_types:
            name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}{counter}"
            counter += 1

        return name
