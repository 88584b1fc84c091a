"""Field constraints and schema tables for indexed documents."""

from cpanmeta.search.constraints import (
    ArrayOf,
    Bool,
    CoercibleSequence,
    Constraint,
    HashRef,
    Location,
    NonEmptyString,
    Number,
    Str,
    StructuredDict,
    Tuple,
)
from cpanmeta.search.schema import FieldDescriptor, IndexType, Schema


__all__ = [
    "ArrayOf",
    "Bool",
    "CoercibleSequence",
    "Constraint",
    "FieldDescriptor",
    "HashRef",
    "IndexType",
    "Location",
    "NonEmptyString",
    "Number",
    "Schema",
    "Str",
    "StructuredDict",
    "Tuple",
]
