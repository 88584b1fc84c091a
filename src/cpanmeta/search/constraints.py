"""
Field constraints for document schemas.

Constraints are small immutable predicates used to declare the shape of a
document field. Each constraint can:
- validate: return None when a value conforms, or a message describing the
  first failure found
- coerce: bring a value of a compatible shape into the declared shape
  (never raises; returns the input unchanged when no coercion applies)

Messages follow the form::

    Validation failed for 'NonEmptySimpleStr' with value ''

with a ``: <detail>`` suffix when the failure sits inside a container.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


MAX_SIMPLE_STR_LEN = 255
_MAX_DISPLAY_LEN = 120


def _display(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_DISPLAY_LEN:
        return text[:_MAX_DISPLAY_LEN] + "..."
    return text


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


@dataclass(frozen=True)
class Constraint(ABC):
    """Base class for all field constraints."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name used in failure messages."""

    @abstractmethod
    def _problem(self, value: Any) -> str | None:
        """Return None when valid, "" for a plain failure, or a nested detail."""

    def validate(self, value: Any) -> str | None:
        """Return None if value conforms, otherwise the first failure message."""
        problem = self._problem(value)
        if problem is None:
            return None
        message = f"Validation failed for '{self.name}' with value {_display(value)}"
        return f"{message}: {problem}" if problem else message

    def is_valid(self, value: Any) -> bool:
        return self._problem(value) is None

    def coerce(self, value: Any) -> Any:
        """Coerce value into the declared shape. Identity by default."""
        return value

    def matches_shape(self, value: Any) -> bool:
        """Whether value has this constraint's structural shape.

        Used when deciding whether a bare value should be wrapped into a
        sequence. Shape is looser than validity: a mapping with an empty
        ``name`` still has the shape of a ``StructuredDict``.
        """
        return self.is_valid(value)


@dataclass(frozen=True)
class Str(Constraint):
    """Any string, including the empty string."""

    @property
    def name(self) -> str:
        return "Str"

    def _problem(self, value: Any) -> str | None:
        return None if isinstance(value, str) else ""

    def matches_shape(self, value: Any) -> bool:
        return isinstance(value, str)


@dataclass(frozen=True)
class NonEmptyString(Constraint):
    """
    Non-empty single-line string of at most 255 characters.

    Mirrors the ``NonEmptySimpleStr`` type used for names and places.
    """

    @property
    def name(self) -> str:
        return "NonEmptySimpleStr"

    def _problem(self, value: Any) -> str | None:
        if not isinstance(value, str) or not value:
            return ""
        if len(value) > MAX_SIMPLE_STR_LEN or "\n" in value:
            return ""
        return None

    def matches_shape(self, value: Any) -> bool:
        return isinstance(value, str)


@dataclass(frozen=True)
class Bool(Constraint):
    """True/False, the integers 0 and 1, their string forms, "" or None.

    Import data carries flags in all of these spellings; an unset flag
    (None or "") reads as false.
    """

    @property
    def name(self) -> str:
        return "Bool"

    def _problem(self, value: Any) -> str | None:
        if value is None or value in ("", "0", "1"):
            return None
        if isinstance(value, int) and value in (0, 1):
            return None
        return ""


@dataclass(frozen=True)
class Number(Constraint):
    """Integer or float. Booleans are rejected."""

    @property
    def name(self) -> str:
        return "Num"

    def _problem(self, value: Any) -> str | None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return ""
        return None


@dataclass(frozen=True)
class HashRef(Constraint):
    """Any mapping. The inner shape is not inspected."""

    @property
    def name(self) -> str:
        return "HashRef"

    def _problem(self, value: Any) -> str | None:
        return None if isinstance(value, Mapping) else ""

    def matches_shape(self, value: Any) -> bool:
        return isinstance(value, Mapping)


@dataclass(frozen=True)
class ArrayOf(Constraint):
    """List or tuple whose every element satisfies ``inner``."""

    inner: Constraint

    @property
    def name(self) -> str:
        return f"ArrayRef[{self.inner.name}]"

    def _problem(self, value: Any) -> str | None:
        if not _is_sequence(value):
            return ""
        for index, item in enumerate(value):
            message = self.inner.validate(item)
            if message is not None:
                return f"element {index}: {message}"
        return None

    def matches_shape(self, value: Any) -> bool:
        return _is_sequence(value)


@dataclass(frozen=True)
class StructuredDict(Constraint):
    """
    Mapping with declared sub-fields.

    Args:
        fields: ``(key, constraint)`` pairs, checked in order
        optional: Keys that may be absent
        closed: Reject keys that are not declared (default: unknown keys are ignored)

    Example:
        StructuredDict.of(name=NonEmptyString(), id=Str())
    """

    fields: tuple[tuple[str, Constraint], ...]
    optional: frozenset[str] = field(default_factory=frozenset)
    closed: bool = False

    @classmethod
    def of(cls, *, optional: tuple[str, ...] = (), closed: bool = False, **fields: Constraint) -> StructuredDict:
        return cls(fields=tuple(fields.items()), optional=frozenset(optional), closed=closed)

    @property
    def name(self) -> str:
        parts = []
        for key, constraint in self.fields:
            label = f"Optional[{constraint.name}]" if key in self.optional else constraint.name
            parts.append(f"{key}=>{label}")
        return f"Dict[{','.join(parts)}]"

    def _problem(self, value: Any) -> str | None:
        if not isinstance(value, Mapping):
            return ""
        for key, constraint in self.fields:
            if key not in value:
                if key in self.optional:
                    continue
                return f"missing key '{key}'"
            message = constraint.validate(value[key])
            if message is not None:
                return f"key '{key}': {message}"
        if self.closed:
            declared = {key for key, _ in self.fields}
            unexpected = sorted(str(key) for key in value if key not in declared)
            if unexpected:
                return f"unexpected keys {unexpected}"
        return None

    def matches_shape(self, value: Any) -> bool:
        return isinstance(value, Mapping)


@dataclass(frozen=True)
class Tuple(Constraint):
    """Fixed-length sequence matched position by position."""

    items: tuple[Constraint, ...]

    @property
    def name(self) -> str:
        return f"Tuple[{','.join(item.name for item in self.items)}]"

    def _problem(self, value: Any) -> str | None:
        if not _is_sequence(value) or len(value) != len(self.items):
            return ""
        for index, (constraint, item) in enumerate(zip(self.items, value)):
            message = constraint.validate(item)
            if message is not None:
                return f"element {index}: {message}"
        return None

    def matches_shape(self, value: Any) -> bool:
        return _is_sequence(value) and len(value) == len(self.items)


@dataclass(frozen=True)
class CoercibleSequence(ArrayOf):
    """
    ``ArrayOf(inner)`` that also accepts a bare ``inner`` value.

    Coercion decodes the value as a tagged union: a sequence is kept as a
    list; otherwise, if the value has the shape of ``inner`` it is wrapped
    into a one-element list. Anything else is left alone for validation to
    reject.
    """

    def coerce(self, value: Any) -> Any:
        if _is_sequence(value):
            return list(value)
        if self.inner.matches_shape(value):
            return [value]
        return value


@dataclass(frozen=True)
class Location(Tuple):
    """
    ``[longitude, latitude]`` pair.

    Coerces from ``{"lon": .., "lat": ..}``, ``{"longitude": .., "latitude": ..}``
    and the ``"lat,lon"`` string form.
    """

    items: tuple[Constraint, ...] = (Number(), Number())

    @property
    def name(self) -> str:
        return "Location"

    def coerce(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            if "lon" in value and "lat" in value:
                return [value["lon"], value["lat"]]
            if "longitude" in value and "latitude" in value:
                return [value["longitude"], value["latitude"]]
            return value
        if isinstance(value, str):
            parts = [part.strip() for part in value.split(",")]
            if len(parts) != 2:
                return value
            try:
                lat, lon = (float(part) for part in parts)
            except ValueError:
                return value
            return [lon, lat]
        if isinstance(value, tuple):
            return list(value)
        return value
