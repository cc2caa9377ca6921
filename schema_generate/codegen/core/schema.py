"""
Core schema representation for code generation.

Holds the record/field/alias model that generators consume. The model is
built once by the loader and treated as read-only for the whole run.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Any

# External name that removes a field from one direction of (de)serialization.
OMIT_NAME = "-"

# Additional-property policy values
ADDITIONAL_NONE = ""
ADDITIONAL_DISALLOWED = "false"

ADDITIONAL_PROPERTIES_FIELD = "AdditionalProperties"


@dataclass(frozen=True)
class Field:
    """Represents a single field in a record, or the target of an alias."""

    name: str
    marshal_name: str
    unmarshal_name: str
    marshal_type: str
    unmarshal_type: str
    description: str = ""
    required: bool = False
    omit_empty: bool = False

    @property
    def is_marshaled(self) -> bool:
        return self.marshal_name != OMIT_NAME

    @property
    def is_unmarshaled(self) -> bool:
        return self.unmarshal_name != OMIT_NAME

    @property
    def needs_coercion(self) -> bool:
        """Whether the read and write representations differ."""
        return self.marshal_type != self.unmarshal_type


@dataclass(frozen=True)
class Record:
    """Represents a named aggregate of fields."""

    name: str
    fields: Dict[str, Field] = field(default_factory=dict)
    description: str = ""
    additional_type: str = ADDITIONAL_NONE
    generate_code: bool = True

    @property
    def allows_additional_properties(self) -> bool:
        return self.additional_type not in (ADDITIONAL_NONE, ADDITIONAL_DISALLOWED)

    @property
    def disallows_additional_properties(self) -> bool:
        return self.additional_type == ADDITIONAL_DISALLOWED

    def ordered_fields(self) -> List[Field]:
        """Fields in emission order."""
        return [self.fields[key] for key in ordered_names(self.fields)]

    def required_fields(self) -> List[Field]:
        return [f for f in self.ordered_fields() if f.required]


@dataclass(frozen=True)
class SchemaModel:
    """Everything a generator needs: records plus type aliases."""

    records: Dict[str, Record] = field(default_factory=dict)
    aliases: Dict[str, Field] = field(default_factory=dict)

    def ordered_records(self) -> List[Record]:
        return [self.records[key] for key in ordered_names(self.records)]

    def ordered_aliases(self) -> List[Field]:
        return [self.aliases[key] for key in ordered_names(self.aliases)]

    def get_attention_summary(self) -> Dict[str, int]:
        """Counts used for generation metadata."""
        all_fields = [f for r in self.records.values() for f in r.fields.values()]
        return {
            "records": len(self.records),
            "aliases": len(self.aliases),
            "code_generating_records": sum(
                1 for r in self.records.values() if r.generate_code
            ),
            "total_fields": len(all_fields),
            "required_fields": sum(1 for f in all_fields if f.required),
            "coerced_fields": sum(1 for f in all_fields if f.needs_coercion),
        }


def ordered_names(mapping: Mapping[str, Any]) -> List[str]:
    """
    Return the keys of a name-keyed mapping in emission order.

    Output must never depend on mapping insertion order, so every walk over
    records, aliases or fields goes through here.
    """
    return sorted(mapping.keys())
