import pytest

from schema_generate.codegen.core.schema import Field, Record, SchemaModel
from schema_generate.codegen.languages.go import GoGenerator


def make_field(name, json_name=None, go_type="string", **kwargs):
    """Field whose marshal/unmarshal names and types default to the same value."""
    json_name = json_name if json_name is not None else name.lower()
    return Field(
        name=name,
        marshal_name=kwargs.pop("marshal_name", json_name),
        unmarshal_name=kwargs.pop("unmarshal_name", json_name),
        marshal_type=kwargs.pop("marshal_type", go_type),
        unmarshal_type=kwargs.pop("unmarshal_type", go_type),
        **kwargs,
    )


def make_record(name, *fields, **kwargs):
    return Record(name=name, fields={f.name: f for f in fields}, **kwargs)


@pytest.fixture
def person_record():
    return make_record(
        "Person",
        make_field("Name", "name", "string", required=True),
        make_field("Age", "age", "int", omit_empty=True),
        description="a person",
        additional_type="false",
    )


@pytest.fixture
def person_model(person_record):
    return SchemaModel(records={"Person": person_record})


@pytest.fixture
def extensible_record():
    return make_record(
        "Thing",
        make_field("Id", "id", "*string", required=True),
        make_field(
            "AdditionalProperties",
            "-",
            "map[string]int",
        ),
        additional_type="int",
    )


@pytest.fixture
def generator():
    return GoGenerator({"package_name": "models"})


@pytest.fixture
def engine(generator):
    return generator.template_engine


@pytest.fixture
def person_document():
    return {
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
        "aliases": {"PersonID": {"type": "string", "description": "identifies a person"}},
    }
