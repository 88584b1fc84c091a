"""Result-shape normalization for raw search hits."""

from collections.abc import MutableMapping
from typing import Any


def single_valued_to_scalar(document: MutableMapping[str, Any] | None) -> MutableMapping[str, Any] | None:
    """Replace every one-element list value with its sole element.

    The search backend returns stored ``fields`` (and some ``_source``
    values) as lists even for single-valued keys. Callers want scalars.
    The mapping is modified in place and returned; ``None`` passes through.
    """
    if document is None:
        return None
    for key, value in document.items():
        if isinstance(value, list) and len(value) == 1:
            document[key] = value[0]
    return document
