import pytest

from schema_generate.codegen.languages.go.types import (
    Coercion,
    GoKind,
    GoType,
    InvalidTypeError,
    UnsupportedCoercionError,
    coercion_for,
    parse_go_type,
    resolve_type_imports,
    zero_value_literal,
)


class TestParseGoType:
    def test_primitive_kinds(self):
        assert parse_go_type("bool").kind == GoKind.BOOLEAN
        assert parse_go_type("string").kind == GoKind.TEXT
        assert parse_go_type("int64").kind == GoKind.INTEGER
        assert parse_go_type("uint8").kind == GoKind.INTEGER
        assert parse_go_type("float32").kind == GoKind.FLOAT
        assert parse_go_type("array").kind == GoKind.ARRAY
        assert parse_go_type("nil").kind == GoKind.NIL
        assert parse_go_type("interface{}").kind == GoKind.INTERFACE
        assert parse_go_type("any").kind == GoKind.INTERFACE

    def test_fixed_array(self):
        parsed = parse_go_type("[5]int")
        assert parsed.kind == GoKind.FIXED_ARRAY
        assert parsed.name == "5"
        assert parsed.elem == GoType(GoKind.INTEGER, name="int")
        assert parse_go_type("[3]time.Time").qualifiers() == {"time"}

    def test_composite_types(self):
        parsed = parse_go_type("map[string][]*Address")
        assert parsed.kind == GoKind.MAP
        assert parsed.key == GoType(GoKind.TEXT, name="string")
        assert parsed.elem.kind == GoKind.SLICE
        assert parsed.elem.elem.is_pointer
        assert parsed.elem.elem.elem == GoType(GoKind.OTHER, name="Address")

    def test_nested_map_key_brackets(self):
        parsed = parse_go_type("map[string]map[string]int")
        assert parsed.render() == "map[string]map[string]int"

    @pytest.mark.parametrize(
        "descriptor",
        ["*int", "[]string", "interface{}", "any", "time.Time", "[5]int", "[2][3]*Address"],
    )
    def test_render_round_trips_descriptor(self, descriptor):
        assert parse_go_type(descriptor).render() == descriptor

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_go_type("  string ").render() == "string"

    @pytest.mark.parametrize(
        "descriptor",
        [
            "",
            "   ",
            "func",
            "map[string",
            "1abc",
            "a b",
            "Foo; os.Exit(1)",
            "type.Foo",
            "[5]",
            "[n]int",
            "[-1]int",
        ],
    )
    def test_invalid_descriptors(self, descriptor):
        with pytest.raises(InvalidTypeError):
            parse_go_type(descriptor)

    def test_qualifiers_are_collected_recursively(self):
        assert parse_go_type("map[string]*time.Time").qualifiers() == {"time"}
        assert parse_go_type("[]Address").qualifiers() == set()


class TestZeroValueLiteral:
    @pytest.mark.parametrize(
        "descriptor, literal",
        [
            ("*Address", "nil"),
            ("[]int", "nil"),
            ("array", "nil"),
            ("nil", "nil"),
            ("interface{}", "nil"),
            ("any", "nil"),
            ("bool", "false"),
            ("int", "0"),
            ("uint32", "0"),
            ("float64", "0"),
            ("string", '""'),
        ],
    )
    def test_literal_kinds(self, descriptor, literal):
        assert zero_value_literal(parse_go_type(descriptor)) == (literal, True)

    @pytest.mark.parametrize(
        "descriptor", ["Address", "map[string]int", "time.Time", "[3]int"]
    )
    def test_structural_kinds(self, descriptor):
        assert zero_value_literal(parse_go_type(descriptor)) == ("", False)


class TestCoercion:
    def test_identical_types(self):
        assert coercion_for("string", "string") == Coercion.NONE
        assert coercion_for("*Address", " *Address") == Coercion.NONE

    def test_text_to_integer(self):
        assert coercion_for("int", "string") == Coercion.TEXT_TO_INTEGER
        assert coercion_for("uint16", "string") == Coercion.TEXT_TO_INTEGER

    def test_integer_to_text(self):
        assert coercion_for("string", "int64") == Coercion.INTEGER_TO_TEXT

    @pytest.mark.parametrize(
        "marshal_type, unmarshal_type",
        [("int", "float64"), ("string", "bool"), ("*int", "string"), ("int", "int64")],
    )
    def test_unsupported_pairs(self, marshal_type, unmarshal_type):
        with pytest.raises(UnsupportedCoercionError):
            coercion_for(marshal_type, unmarshal_type)

    def test_invalid_descriptor(self):
        with pytest.raises(InvalidTypeError):
            coercion_for("int", "")


def test_resolve_type_imports():
    paths, unknown = resolve_type_imports(
        parse_go_type("map[string]uuid.UUID"), {"uuid": "github.com/google/uuid"}
    )
    assert paths == {"github.com/google/uuid"}
    assert unknown == set()

    paths, unknown = resolve_type_imports(parse_go_type("[]decimal.Decimal"), {})
    assert paths == set()
    assert unknown == {"decimal"}

    paths, _ = resolve_type_imports(parse_go_type("*time.Time"), {})
    assert paths == {"time"}
