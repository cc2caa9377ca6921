"""Build a SchemaModel from a JSON model document.

The document is a plain description of records, fields and aliases; see
``EXAMPLE_DOCUMENT`` for the accepted shape. Only the structure is checked
here. Go-specific validity is reported by the generator.
"""

from pathlib import Path
from typing import Any, Dict, Mapping

from .codegen.core.naming import is_identifier
from .codegen.core.schema import (
    ADDITIONAL_DISALLOWED,
    ADDITIONAL_NONE,
    ADDITIONAL_PROPERTIES_FIELD,
    OMIT_NAME,
    Field,
    Record,
    SchemaModel,
)
from .codegen.languages.go.naming import create_go_sanitizer
from .logging_config import get_logger
from .utils import load_document

logger = get_logger(__name__)


class ModelError(Exception):
    """Raised when a model document does not describe a valid model."""

    pass


EXAMPLE_DOCUMENT = {
    "records": {
        "Person": {
            "description": "a person",
            "additional_type": "false",
            "fields": {
                "Name": {"json_name": "name", "type": "string", "required": True},
                "Age": {"json_name": "age", "type": "int", "omit_empty": True},
            },
        }
    },
    "aliases": {"PersonID": {"type": "string"}},
}


def load_model(file_path: str | Path | None = None, url: str | None = None) -> SchemaModel:
    """Read a model document from a file or URL and build the model."""
    source, document = load_document(file_path=file_path, url=url)
    logger.debug("Building model from %s", source)
    return model_from_dict(document)


def model_from_dict(document: Mapping[str, Any]) -> SchemaModel:
    """
    Build a SchemaModel from a parsed model document.

    Raises:
        ModelError: If the document has the wrong shape
    """
    records_doc = _mapping(document.get("records", {}), "records")
    aliases_doc = _mapping(document.get("aliases", {}), "aliases")

    sanitizer = create_go_sanitizer()
    records = {
        key: _build_record(key, _mapping(value, f"record {key!r}"), sanitizer)
        for key, value in records_doc.items()
    }
    aliases = {key: _build_alias(key, value) for key, value in aliases_doc.items()}

    logger.info("Loaded %d record(s) and %d alias(es)", len(records), len(aliases))
    return SchemaModel(records=records, aliases=aliases)


def _build_record(key: str, doc: Mapping[str, Any], sanitizer) -> Record:
    name = _string(doc.get("name", key), f"record {key!r} name")
    additional_type = _additional_type(doc.get("additional_type", ADDITIONAL_NONE), key)

    fields: Dict[str, Field] = {}
    for field_key, field_doc in _mapping(doc.get("fields", {}), f"record {key!r} fields").items():
        where = f"{key}.{field_key}"
        field = _build_field(field_key, _mapping(field_doc, f"field {where!r}"), sanitizer, where)
        if field.name in fields:
            raise ModelError(f"Record {key!r} has more than one field named {field.name}")
        fields[field.name] = field

    if (
        additional_type not in (ADDITIONAL_NONE, ADDITIONAL_DISALLOWED)
        and ADDITIONAL_PROPERTIES_FIELD not in fields
    ):
        map_type = f"map[string]{additional_type}"
        fields[ADDITIONAL_PROPERTIES_FIELD] = Field(
            name=ADDITIONAL_PROPERTIES_FIELD,
            marshal_name=OMIT_NAME,
            unmarshal_name=OMIT_NAME,
            marshal_type=map_type,
            unmarshal_type=map_type,
        )

    return Record(
        name=name,
        fields=fields,
        description=_string(doc.get("description", ""), f"record {key!r} description"),
        additional_type=additional_type,
        generate_code=bool(doc.get("generate_code", True)),
    )


def _build_field(key: str, doc: Mapping[str, Any], sanitizer, where: str) -> Field:
    if "name" in doc:
        name = _string(doc["name"], f"field {where!r} name")
    elif is_identifier(key):
        name = key
    else:
        name = sanitizer.sanitize_name(key)
        logger.debug("Field key %r renamed to %s", key, name)

    json_name = doc.get("json_name", key)
    type_name = doc.get("type")
    marshal_type = doc.get("marshal_type", type_name)
    unmarshal_type = doc.get("unmarshal_type", type_name if type_name is not None else marshal_type)
    if marshal_type is None:
        raise ModelError(f"Field {where!r} has no type")

    return Field(
        name=name,
        marshal_name=_string(doc.get("marshal_name", json_name), f"field {where!r} marshal_name"),
        unmarshal_name=_string(doc.get("unmarshal_name", json_name), f"field {where!r} unmarshal_name"),
        marshal_type=_string(marshal_type, f"field {where!r} marshal_type"),
        unmarshal_type=_string(unmarshal_type, f"field {where!r} unmarshal_type"),
        description=_string(doc.get("description", ""), f"field {where!r} description"),
        required=bool(doc.get("required", False)),
        omit_empty=bool(doc.get("omit_empty", False)),
    )


def _build_alias(key: str, doc: Any) -> Field:
    if isinstance(doc, str):
        doc = {"type": doc}
    doc = _mapping(doc, f"alias {key!r}")
    type_name = _string(doc.get("type"), f"alias {key!r} type")
    name = _string(doc.get("name", key), f"alias {key!r} name")
    return Field(
        name=name,
        marshal_name=key,
        unmarshal_name=key,
        marshal_type=type_name,
        unmarshal_type=type_name,
        description=_string(doc.get("description", ""), f"alias {key!r} description"),
    )


def _additional_type(value: Any, key: str) -> str:
    # JSON Schema style booleans are accepted as well as type names
    if value is False:
        return ADDITIONAL_DISALLOWED
    if value is None:
        return ADDITIONAL_NONE
    return _string(value, f"record {key!r} additional_type")


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ModelError(f"Expected an object for {what}, got {type(value).__name__}")
    return value


def _string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise ModelError(f"Expected a string for {what}, got {type(value).__name__}")
    return value
