"""
Go-specific type system for code generation.

Type descriptors from the model are parsed into a closed set of kinds so
that zero-value lookup and coercion selection are total functions instead
of prefix checks on raw text.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Set, Tuple
from enum import Enum

from ...core.generator import GeneratorError
from .naming import GO_RESERVED_WORDS


class InvalidTypeError(GeneratorError):
    """Raised when a type descriptor is not a Go type expression."""

    pass


class UnsupportedCoercionError(GeneratorError):
    """Raised when marshal and unmarshal types differ in an unsupported way."""

    pass


class GoKind(Enum):
    """Every shape a type descriptor can take."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    ARRAY = "array"
    NIL = "nil"
    INTERFACE = "interface"
    POINTER = "pointer"
    SLICE = "slice"
    FIXED_ARRAY = "fixed_array"
    MAP = "map"
    OTHER = "other"


class Coercion(Enum):
    """How a raw JSON value reaches a struct field."""

    NONE = "none"  # decode directly into the field
    TEXT_TO_INTEGER = "text_to_integer"  # "42" -> 42
    INTEGER_TO_TEXT = "integer_to_text"  # 42 -> "42"


INTEGER_TYPES = {
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
}
FLOAT_TYPES = {"float32", "float64"}
UNSIGNED_TYPES = {"uint", "uint8", "uint16", "uint32", "uint64"}

_NAMED_KINDS = {
    "bool": GoKind.BOOLEAN,
    "string": GoKind.TEXT,
    "array": GoKind.ARRAY,
    "nil": GoKind.NIL,
}

# Optional package qualifier, then an identifier
_NAMED_TYPE_RE = re.compile(r"^(?:([^\W\d]\w*)\.)?([^\W\d]\w*)$")

# Length prefix of a fixed-size array such as [5]int
_FIXED_ARRAY_RE = re.compile(r"^\[(\d+)\]")


@dataclass(frozen=True)
class GoType:
    """
    Immutable parsed form of a type descriptor.

    POINTER, SLICE and FIXED_ARRAY carry their target in ``elem``
    (FIXED_ARRAY keeps its length in ``name``); MAP carries ``key`` and
    ``elem``; every other kind is identified by ``name``.
    """

    kind: GoKind
    name: str = ""
    elem: Optional["GoType"] = None
    key: Optional["GoType"] = None

    @property
    def is_pointer(self) -> bool:
        return self.kind == GoKind.POINTER

    def render(self) -> str:
        """Render back to Go source."""
        if self.kind == GoKind.POINTER:
            return f"*{self.elem.render()}"
        if self.kind == GoKind.SLICE:
            return f"[]{self.elem.render()}"
        if self.kind == GoKind.FIXED_ARRAY:
            return f"[{self.name}]{self.elem.render()}"
        if self.kind == GoKind.MAP:
            return f"map[{self.key.render()}]{self.elem.render()}"
        return self.name

    def qualifiers(self) -> Set[str]:
        """Package qualifiers referenced anywhere in this type."""
        found = set()
        for part in (self.elem, self.key):
            if part is not None:
                found |= part.qualifiers()
        if self.kind == GoKind.OTHER:
            match = _NAMED_TYPE_RE.match(self.name)
            if match and match.group(1):
                found.add(match.group(1))
        return found

    def __str__(self) -> str:
        return self.render()


def parse_go_type(descriptor: str) -> GoType:
    """
    Parse a type descriptor such as ``*Address`` or ``map[string][]int``.

    Raises:
        InvalidTypeError: If the descriptor is not a supported Go type
    """
    text = (descriptor or "").strip()
    if not text:
        raise InvalidTypeError("Empty type descriptor")

    if text.startswith("*"):
        return GoType(GoKind.POINTER, elem=parse_go_type(text[1:]))

    if text.startswith("[]"):
        return GoType(GoKind.SLICE, elem=parse_go_type(text[2:]))

    array_match = _FIXED_ARRAY_RE.match(text)
    if array_match:
        return GoType(
            GoKind.FIXED_ARRAY,
            name=str(int(array_match.group(1))),
            elem=parse_go_type(text[array_match.end() :]),
        )

    if text.startswith("map["):
        close = _matching_bracket(text, 3)
        if close is None:
            raise InvalidTypeError(f"Unbalanced map type: {descriptor!r}")
        return GoType(
            GoKind.MAP,
            key=parse_go_type(text[4:close]),
            elem=parse_go_type(text[close + 1 :]),
        )

    if text in ("interface{}", "any"):
        return GoType(GoKind.INTERFACE, name=text)

    if text in INTEGER_TYPES:
        return GoType(GoKind.INTEGER, name=text)
    if text in FLOAT_TYPES:
        return GoType(GoKind.FLOAT, name=text)
    if text in _NAMED_KINDS:
        return GoType(_NAMED_KINDS[text], name=text)

    match = _NAMED_TYPE_RE.match(text)
    if not match or match.group(2) in GO_RESERVED_WORDS:
        raise InvalidTypeError(f"Invalid type descriptor: {descriptor!r}")
    if match.group(1) in GO_RESERVED_WORDS:
        raise InvalidTypeError(f"Invalid type descriptor: {descriptor!r}")
    return GoType(GoKind.OTHER, name=text)


def _matching_bracket(text: str, open_index: int) -> Optional[int]:
    depth = 0
    for index in range(open_index, len(text)):
        if text[index] == "[":
            depth += 1
        elif text[index] == "]":
            depth -= 1
            if depth == 0:
                return index
    return None


def zero_value_literal(go_type: GoType) -> Tuple[str, bool]:
    """
    Return the literal a value of this type equals when empty.

    Returns:
        (literal, True) when a comparison literal exists, otherwise
        ("", False) and emptiness has to be checked structurally.
    """
    if go_type.kind in (
        GoKind.POINTER,
        GoKind.SLICE,
        GoKind.ARRAY,
        GoKind.NIL,
        GoKind.INTERFACE,
    ):
        return "nil", True
    if go_type.kind == GoKind.BOOLEAN:
        return "false", True
    if go_type.kind in (GoKind.INTEGER, GoKind.FLOAT):
        return "0", True
    if go_type.kind == GoKind.TEXT:
        return '""', True
    # MAP, FIXED_ARRAY and OTHER
    return "", False


def coercion_for(marshal_type: str, unmarshal_type: str) -> Coercion:
    """
    Pick how input of ``unmarshal_type`` is stored into a ``marshal_type`` field.

    Raises:
        InvalidTypeError: If either descriptor does not parse
        UnsupportedCoercionError: For any divergent pair other than
            text <-> integer
    """
    field_type = parse_go_type(marshal_type)
    input_type = parse_go_type(unmarshal_type)

    if field_type == input_type:
        return Coercion.NONE
    if field_type.kind == GoKind.INTEGER and input_type.kind == GoKind.TEXT:
        return Coercion.TEXT_TO_INTEGER
    if field_type.kind == GoKind.TEXT and input_type.kind == GoKind.INTEGER:
        return Coercion.INTEGER_TO_TEXT

    raise UnsupportedCoercionError(
        f"Cannot coerce {input_type.render()} input into a "
        f"{field_type.render()} field"
    )


# Package qualifiers resolvable without configuration
DEFAULT_TYPE_IMPORTS: Dict[str, str] = {
    "json": "encoding/json",
    "time": "time",
}


def resolve_type_imports(
    go_type: GoType, type_imports: Dict[str, str]
) -> Tuple[Set[str], Set[str]]:
    """
    Map the qualifiers used by a type to import paths.

    Returns:
        (import paths, qualifiers with no known import path)
    """
    known = {**DEFAULT_TYPE_IMPORTS, **type_imports}
    imports = set()
    unknown = set()
    for qualifier in go_type.qualifiers():
        if qualifier in known:
            imports.add(known[qualifier])
        else:
            unknown.add(qualifier)
    return imports, unknown
