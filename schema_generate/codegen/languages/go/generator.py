"""
Go code generator implementation.

Generates Go struct declarations plus MarshalJSON, UnmarshalJSON and ToMap
methods for every record in a schema model.
"""

from typing import Dict, List, Optional, Any, Set, TextIO, Union
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, clean_package_name
from ...core.generator import (
    CodeGenerator,
    GeneratorError,
    GenerationResult,
    generate_code,
)
from ...core.naming import InvalidIdentifierError
from ...core.schema import ADDITIONAL_PROPERTIES_FIELD, Record, SchemaModel
from ...core.templates import TemplateEngine
from .emitters import (
    EmittedCode,
    collect_imports,
    emit_marshal_code,
    emit_to_map_code,
    emit_unmarshal_code,
)
from .naming import create_go_sanitizer, go_ident, go_string, validate_go_package_name
from .types import (
    DEFAULT_TYPE_IMPORTS,
    GoKind,
    UnsupportedCoercionError,
    coercion_for,
    parse_go_type,
    resolve_type_imports,
)

logger = get_logger(__name__)

# Packages the emitted method bodies refer to by name
EMITTED_PACKAGES = {"errors", "json", "reflect", "sort", "strconv", "strings"}

GENERATED_METHODS = ("MarshalJSON", "UnmarshalJSON", "ToMap")


def go_type(descriptor: str) -> str:
    """Template filter: re-render a type descriptor from its parsed form."""
    return parse_go_type(descriptor).render()


class GoGenerator(CodeGenerator):
    """Code generator for Go structs with hand-written JSON methods."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize Go generator with configuration."""
        super().__init__(config)

        self.sanitizer = create_go_sanitizer()
        self.package_name = clean_package_name(self.config.package_name)
        self.type_imports: Dict[str, str] = dict(
            self.config.custom.get("type_imports", {})
        )

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def register_template_filters(self, engine: TemplateEngine) -> None:
        engine.add_filter("go_ident", go_ident)
        engine.add_filter("go_string", go_string)
        engine.add_filter("go_type", go_type)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def generate(self, model: SchemaModel) -> str:
        """Generate the complete Go file for a model."""
        conflicts = self._name_conflicts(model)
        if conflicts:
            raise InvalidIdentifierError("; ".join(conflicts))

        records = model.ordered_records()
        aliases = model.ordered_aliases()

        # Methods are rendered first so their imports can head the file
        emitted: List[EmittedCode] = []
        for record in records:
            if record.generate_code:
                emitted.extend(self.emit_record_code(record))
                logger.debug("Emitted methods for %s", record.name)

        imports = set(collect_imports(emitted))
        imports |= self._declaration_imports(model)

        context = {
            "header_tool": " ".join(self.config.header_tool.split()),
            "package_name": self.package_name,
            "imports": sorted(imports),
            "aliases": aliases,
            "records": records,
            "add_comments": self.config.add_comments,
            "code": "".join(piece.code for piece in emitted),
        }
        return self.render_template("file.go.j2", context)

    def emit_record_code(self, record: Record) -> List[EmittedCode]:
        """Marshal, unmarshal and map-view code for one record, in that order."""
        engine = self.template_engine
        return [
            emit_marshal_code(
                record, engine, sort_additional=self.config.sort_additional_properties
            ),
            emit_unmarshal_code(record, engine),
            emit_to_map_code(record, engine),
        ]

    def _declaration_imports(self, model: SchemaModel) -> Set[str]:
        """Imports needed by alias and struct field types."""
        imports = set()
        descriptors = [a.unmarshal_type for a in model.ordered_aliases()]
        descriptors.extend(
            f.marshal_type
            for record in model.ordered_records()
            for f in record.ordered_fields()
        )
        for descriptor in descriptors:
            paths, _ = resolve_type_imports(parse_go_type(descriptor), self.type_imports)
            imports |= paths
        return imports

    def validate_schemas(self, model: SchemaModel) -> List[str]:
        """Validate a model for Go generation."""
        warnings = super().validate_schemas(model)

        for message in validate_go_package_name(self.package_name):
            warnings.append(f"Package name: {message}")

        for alias in model.ordered_aliases():
            warnings.extend(self._check_name(alias.name, f"Alias {alias.name}"))
            warnings.extend(
                self._check_type(alias.unmarshal_type, f"Alias {alias.name}")
            )

        for record in model.ordered_records():
            warnings.extend(self._validate_record(record))

        warnings.extend(self._name_conflicts(model))

        return warnings

    def _validate_record(self, record: Record) -> List[str]:
        warnings = self._check_name(record.name, f"Record {record.name}")

        if record.allows_additional_properties:
            warnings.extend(
                self._check_type(
                    record.additional_type, f"Record {record.name} additional type"
                )
            )
            if ADDITIONAL_PROPERTIES_FIELD not in record.fields:
                warnings.append(
                    f"Record {record.name} allows additional properties but has "
                    f"no {ADDITIONAL_PROPERTIES_FIELD} field"
                )

        seen_marshal: Dict[str, str] = {}
        seen_unmarshal: Dict[str, str] = {}

        for field in record.ordered_fields():
            where = f"{record.name}.{field.name}"
            warnings.extend(self._check_name(field.name, f"Field {where}"))
            warnings.extend(self._check_type(field.marshal_type, f"Field {where}"))
            if field.unmarshal_type != field.marshal_type:
                warnings.extend(
                    self._check_type(field.unmarshal_type, f"Field {where}")
                )

            try:
                field_kind = parse_go_type(field.marshal_type).kind
                if field.is_unmarshaled:
                    coercion_for(field.marshal_type, field.unmarshal_type)
            except UnsupportedCoercionError as e:
                warnings.append(f"Field {where}: {e}")
            except GeneratorError:
                # Already reported by _check_type
                continue

            if field.required and field.is_marshaled and field_kind != GoKind.POINTER:
                warnings.append(
                    f"Required field {where} is not a pointer - "
                    f"MarshalJSON cannot check that it is present"
                )

            if field.is_marshaled:
                if field.marshal_name in seen_marshal:
                    warnings.append(
                        f"Fields {record.name}.{seen_marshal[field.marshal_name]} and "
                        f"{where} share the JSON name {field.marshal_name!r}"
                    )
                seen_marshal.setdefault(field.marshal_name, field.name)
            if field.is_unmarshaled:
                if field.unmarshal_name in seen_unmarshal:
                    warnings.append(
                        f"Fields {record.name}.{seen_unmarshal[field.unmarshal_name]} "
                        f"and {where} read the same JSON key "
                        f"{field.unmarshal_name!r}"
                    )
                seen_unmarshal.setdefault(field.unmarshal_name, field.name)

        return warnings

    def _name_conflicts(self, model: SchemaModel) -> List[str]:
        """
        Names that are valid identifiers but still break compilation.

        Top-level declarations may not repeat or shadow an imported package,
        and a field may not share its name with a generated method.
        """
        problems = []
        packages = EMITTED_PACKAGES | set(DEFAULT_TYPE_IMPORTS) | set(self.type_imports)

        declarations = [("Alias", alias.name) for alias in model.ordered_aliases()]
        declarations.extend(("Record", record.name) for record in model.ordered_records())

        declared: Dict[str, str] = {}
        for kind, name in declarations:
            where = f"{kind} {name}"
            if name in packages:
                problems.append(f"{where} shadows the imported package {name!r}")
            if name in declared:
                problems.append(f"{where} redeclares {declared[name]}")
            declared.setdefault(name, where)

        for record in model.ordered_records():
            if not record.generate_code:
                continue
            for field in record.ordered_fields():
                if field.name in GENERATED_METHODS:
                    problems.append(
                        f"Field {record.name}.{field.name} has the same name as "
                        f"a generated method"
                    )

        return problems

    def _check_name(self, name: str, where: str) -> List[str]:
        try:
            self.sanitizer.validate_identifier(name)
        except InvalidIdentifierError as e:
            return [f"{where}: {e}"]
        return []

    def _check_type(self, descriptor: str, where: str) -> List[str]:
        try:
            parsed = parse_go_type(descriptor)
        except GeneratorError as e:
            return [f"{where}: {e}"]

        _, unknown = resolve_type_imports(parsed, self.type_imports)
        return [
            f"{where}: no import path configured for package {qualifier!r}"
            for qualifier in sorted(unknown)
        ]

    def format_code(self, code: str) -> str:
        """Strip trailing whitespace and collapse runs of blank lines."""
        return super().format_code(code).rstrip("\n") + "\n"


def create_go_generator(
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> GoGenerator:
    """Create a Go generator with default configuration."""
    return GoGenerator(config)


def output(
    stream: TextIO,
    model: SchemaModel,
    package_name: str,
    config: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    """
    Generate Go code for a model and write it to a stream.

    Raises:
        GeneratorError: If the model cannot be rendered
    """
    generator = create_go_generator({**(config or {}), "package_name": package_name})
    result = generate_code(generator, model)
    if not result.success:
        raise result.exception
    stream.write(result.code)
    return result
