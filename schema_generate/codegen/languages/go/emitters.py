"""
Method emitters for Go records.

Each emitter renders one method for one record and reports the imports the
rendered code uses. Emitters never touch shared state; the generator merges
their import sets.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List

from ...core.schema import Field, Record
from ...core.templates import TemplateEngine
from .types import (
    Coercion,
    UNSIGNED_TYPES,
    coercion_for,
    parse_go_type,
    zero_value_literal,
)

_BIT_SIZES = {
    "int": 0,
    "uint": 0,
    "int8": 8,
    "uint8": 8,
    "int16": 16,
    "uint16": 16,
    "int32": 32,
    "uint32": 32,
    "int64": 64,
    "uint64": 64,
}


@dataclass(frozen=True)
class EmittedCode:
    """Rendered source plus the import paths it depends on."""

    code: str
    imports: FrozenSet[str] = field(default_factory=frozenset)


def emit_marshal_code(
    record: Record, engine: TemplateEngine, sort_additional: bool = True
) -> EmittedCode:
    """Render ``MarshalJSON`` for a record."""
    imports = {"strings"}
    fields = []

    for f in record.ordered_fields():
        if not f.is_marshaled:
            continue

        go_type = parse_go_type(f.marshal_type)
        pointer_guard = f.required and go_type.is_pointer
        if pointer_guard:
            imports.add("errors")

        zero_literal = None
        if f.omit_empty:
            literal, has_literal = zero_value_literal(go_type)
            if has_literal:
                zero_literal = literal
            else:
                imports.add("reflect")

        imports.add("encoding/json")
        fields.append(
            {
                "name": f.name,
                "required": f.required,
                "pointer_guard": pointer_guard,
                "required_message": f"{f.marshal_name} is a required field",
                "omit_empty": f.omit_empty,
                "zero_literal": zero_literal,
                "marshal_name": f.marshal_name,
                "fragment_prefix": _json_key(f.marshal_name) + ": ",
            }
        )

    additional = record.allows_additional_properties
    if additional:
        imports.add("encoding/json")
        if sort_additional:
            imports.add("sort")

    code = engine.render_template(
        "marshal.go.j2",
        {
            "record": record,
            "fields": fields,
            "additional": additional,
            "sort_additional": sort_additional,
        },
    )
    return EmittedCode(code, frozenset(imports))


def emit_unmarshal_code(record: Record, engine: TemplateEngine) -> EmittedCode:
    """Render ``UnmarshalJSON`` for a record."""
    imports = {"encoding/json"}
    fields = []

    for f in record.ordered_fields():
        if not f.is_unmarshaled:
            continue

        coercion = coercion_for(f.marshal_type, f.unmarshal_type)
        if coercion != Coercion.NONE:
            imports.add("strconv")
        if f.required:
            imports.add("errors")

        fields.append(_unmarshal_field_context(f, coercion))

    code = engine.render_template(
        "unmarshal.go.j2",
        {
            "record": record,
            "fields": fields,
            "required": [f for f in fields if f["required"]],
            "additional_type": (
                record.additional_type if record.allows_additional_properties else ""
            ),
            "disallow_additional": record.disallows_additional_properties,
        },
    )
    return EmittedCode(code, frozenset(imports))


def emit_to_map_code(record: Record, engine: TemplateEngine) -> EmittedCode:
    """Render ``ToMap``: declared fields only, keyed by their external name."""
    fields = [f for f in record.ordered_fields() if f.is_marshaled]
    code = engine.render_template("to_map.go.j2", {"record": record, "fields": fields})
    return EmittedCode(code)


def _unmarshal_field_context(f: Field, coercion: Coercion) -> Dict[str, Any]:
    context = {
        "name": f.name,
        "unmarshal_name": f.unmarshal_name,
        "required": f.required,
        "required_message": f'"{f.unmarshal_name}" is required but was not present',
        "coercion": coercion.value,
    }

    if coercion == Coercion.TEXT_TO_INTEGER:
        field_type = parse_go_type(f.marshal_type)
        unsigned = field_type.name in UNSIGNED_TYPES
        context.update(
            {
                "field_type": field_type.render(),
                "parse_func": "ParseUint" if unsigned else "ParseInt",
                "bit_size": _BIT_SIZES[field_type.name],
            }
        )
    elif coercion == Coercion.INTEGER_TO_TEXT:
        input_type = parse_go_type(f.unmarshal_type)
        unsigned = input_type.name in UNSIGNED_TYPES
        context.update(
            {
                "holder_type": "uint64" if unsigned else "int64",
                "format_func": "FormatUint" if unsigned else "FormatInt",
            }
        )

    return context


def _json_key(name: str) -> str:
    """The object key exactly as it appears in serialized JSON."""
    return json.dumps(name, ensure_ascii=False)


def collect_imports(emitted: List[EmittedCode]) -> FrozenSet[str]:
    """Union of the imports of several emitted pieces."""
    merged = set()
    for piece in emitted:
        merged |= piece.imports
    return frozenset(merged)
