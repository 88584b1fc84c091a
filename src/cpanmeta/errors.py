"""Exception types raised by cpanmeta.

Validation problems are never raised; they are returned as ``Violation``
lists by ``cpanmeta.domain.validation.validate``. Failures of the query
execution interface propagate unchanged from the executor.
"""


class CpanMetaError(Exception):
    """Base class for cpanmeta errors."""


class MalformedResponseError(CpanMetaError, ValueError):
    """The search backend answered with a body that is not a search response."""
