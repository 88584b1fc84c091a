"""
Schema definition for indexed documents.

A schema is an explicit, ordered table of field descriptors built once at
import time. Each descriptor states:
- required: Whether validation demands the key be present
- constraint: The field's type constraint (see ``cpanmeta.search.constraints``)
- coerce: Whether input is coerced before it is checked and stored
- index: How the field is indexed (analyzed, exact, nested, source only)
- dynamic: Whether the sub-document accepts keys the index has not seen

The validator walks this table in declaration order; nothing reflects over
live objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from cpanmeta.search.constraints import (
    ArrayOf,
    Bool,
    Constraint,
    Location,
    Number,
    StructuredDict,
)


class IndexType(str, Enum):
    """How a field is indexed by the search backend."""

    ANALYZED = "analyzed"
    NOT_ANALYZED = "not_analyzed"
    NESTED = "nested"
    SOURCE_ONLY = "source_only"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One row of a schema's field table.

    Args:
        name: Field name as it appears in the document source
        constraint: Type constraint, or None for an unchecked field
        required: Validation reports "<name> is required" when absent
        coerce: Run ``constraint.coerce`` before checking and storing
        default: Value used at construction when the input omits the field
        index: Indexing strategy (default: exact keyword)
        dynamic: Sub-document accepts unmapped keys
        is_id: Field doubles as the document key
        include_in_root: Nested fields are also copied onto the root document
        derived: Computed from other fields, never read from input
    """

    name: str
    constraint: Constraint | None = None
    required: bool = False
    coerce: bool = False
    default: Any = None
    index: IndexType = IndexType.NOT_ANALYZED
    dynamic: bool = False
    is_id: bool = False
    include_in_root: bool = False
    derived: bool = False

    @property
    def has_constraint(self) -> bool:
        return self.constraint is not None

    def prepare(self, value: Any) -> Any:
        """Apply coercion when the field declares it."""
        if self.coerce and self.constraint is not None:
            return self.constraint.coerce(value)
        return value

    def to_dict(self) -> dict[str, Any]:
        """Serialize descriptor to dict."""
        return {
            "name": self.name,
            "type": self.constraint.name if self.constraint else None,
            "required": self.required,
            "coerce": self.coerce,
            "index": self.index.value,
            "dynamic": self.dynamic,
            "is_id": self.is_id,
            "derived": self.derived,
        }

    def to_mapping(self) -> dict[str, Any]:
        """Index mapping for this field."""
        if self.index == IndexType.SOURCE_ONLY:
            return {"type": "object", "enabled": False}

        mapping = _mapping_for(self.constraint)
        if self.index == IndexType.ANALYZED:
            mapping["fields"] = {"analyzed": {"type": "text", "analyzer": "standard"}}
        elif self.index == IndexType.NESTED:
            mapping["type"] = "nested"
            if self.include_in_root:
                mapping["include_in_root"] = True
        if self.dynamic:
            mapping["dynamic"] = True
        return mapping


def _mapping_for(constraint: Constraint | None) -> dict[str, Any]:
    if isinstance(constraint, ArrayOf):
        return _mapping_for(constraint.inner)
    if isinstance(constraint, StructuredDict):
        return {
            "type": "object",
            "properties": {key: _mapping_for(inner) for key, inner in constraint.fields},
        }
    if isinstance(constraint, Location):
        return {"type": "geo_point"}
    if isinstance(constraint, Bool):
        return {"type": "boolean"}
    if isinstance(constraint, Number):
        return {"type": "float"}
    return {"type": "keyword"}


@dataclass
class Schema:
    """
    Ordered field table for one document type.

    Example:
        schema = Schema(
            name="author",
            unique_field="pauseid",
            fields=[
                FieldDescriptor("pauseid", required=True, is_id=True),
                FieldDescriptor("name", NonEmptyString(), required=True, index=IndexType.ANALYZED),
            ],
        )
    """

    fields: list[FieldDescriptor]
    unique_field: str
    name: str = "default"

    def __post_init__(self) -> None:
        """Validate schema after initialization."""
        self._field_map: dict[str, FieldDescriptor] = {}
        for descriptor in self.fields:
            if descriptor.name in self._field_map:
                msg = f"Duplicate field '{descriptor.name}' in schema '{self.name}'"
                raise ValueError(msg)
            self._field_map[descriptor.name] = descriptor

        if self.unique_field not in self._field_map:
            msg = f"Unique field '{self.unique_field}' not found in schema"
            raise ValueError(msg)

    def __getitem__(self, name: str) -> FieldDescriptor:
        """Get field by name."""
        return self._field_map[name]

    def __contains__(self, name: str) -> bool:
        """Check if field exists."""
        return name in self._field_map

    def __iter__(self):
        """Iterate over fields in declaration order."""
        return iter(self.fields)

    def __len__(self) -> int:
        """Return number of fields."""
        return len(self.fields)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def required_fields(self) -> list[FieldDescriptor]:
        """Return all required fields."""
        return [f for f in self.fields if f.required]

    @property
    def analyzed_fields(self) -> list[FieldDescriptor]:
        """Return all fields indexed for full-text search."""
        return [f for f in self.fields if f.index == IndexType.ANALYZED]

    def to_dict(self) -> dict[str, Any]:
        """Serialize schema to dict."""
        return {
            "name": self.name,
            "unique_field": self.unique_field,
            "fields": [f.to_dict() for f in self.fields],
        }

    def to_mapping(self) -> dict[str, Any]:
        """Build the index mapping for this document type."""
        return {
            "dynamic": False,
            "properties": {f.name: f.to_mapping() for f in self.fields},
        }
