"""
Go code generator module.

Generates Go structs with MarshalJSON, UnmarshalJSON and ToMap methods
from a record/field/alias model.
"""

from .generator import GoGenerator, create_go_generator, output
from .emitters import (
    EmittedCode,
    emit_marshal_code,
    emit_unmarshal_code,
    emit_to_map_code,
)
from .naming import create_go_sanitizer, go_ident, go_string
from .types import (
    Coercion,
    GoKind,
    GoType,
    InvalidTypeError,
    UnsupportedCoercionError,
    coercion_for,
    parse_go_type,
    zero_value_literal,
)

__all__ = [
    "GoGenerator",
    "create_go_generator",
    "output",
    # Emitters
    "EmittedCode",
    "emit_marshal_code",
    "emit_unmarshal_code",
    "emit_to_map_code",
    # Naming
    "create_go_sanitizer",
    "go_ident",
    "go_string",
    # Type system
    "Coercion",
    "GoKind",
    "GoType",
    "InvalidTypeError",
    "UnsupportedCoercionError",
    "coercion_for",
    "parse_go_type",
    "zero_value_literal",
]
