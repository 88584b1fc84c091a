"""Field-level validation of untyped input against a schema.

Violations are returned, never raised; the caller decides whether to reject
the record. One message is reported per field: the first constraint failure
wins.
"""

from collections.abc import Mapping
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from cpanmeta.search.schema import Schema


logger = logging.getLogger(__name__)


class Violation(BaseModel):
    """Value object describing why one field failed validation."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


def validate(schema: Schema, data: Mapping[str, Any]) -> list[Violation]:
    """Check ``data`` against every field of ``schema`` in declaration order.

    Args:
        schema: Field table to validate against
        data: Raw input, e.g. one record from a bulk import

    Returns:
        Violations in field order; empty when the input is fully valid

    Rules:
        1. Required and absent: ``"<field> is required"``
        2. Present with a constraint: coerce (if the field is coercible), then
           check; a failure yields the constraint's message
        3. Neither required nor present: skipped
        Derived fields are owned by the record and are not read from input,
        so they are skipped as well.
    """
    violations: list[Violation] = []
    for descriptor in schema:
        if descriptor.derived:
            continue
        if descriptor.required and descriptor.name not in data:
            violations.append(Violation(field=descriptor.name, message=f"{descriptor.name} is required"))
        elif descriptor.name in data and descriptor.has_constraint:
            value = descriptor.prepare(data[descriptor.name])
            message = descriptor.constraint.validate(value)
            if message is not None:
                violations.append(Violation(field=descriptor.name, message=message))

    logger.debug("Validated %s input: %d violation(s)", schema.name, len(violations))
    return violations
