"""Shared plumbing for query sets."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from cpanmeta.adapters.executor import AbstractQueryExecutor, Response
from cpanmeta.config import Settings, get_settings
from cpanmeta.observability.context import query_context
from cpanmeta.observability.tracing import create_span
from cpanmeta.utils.flatten import single_valued_to_scalar


logger = logging.getLogger(__name__)


def total_hits(response: Response) -> int:
    """Total match count, whether reported as an int or as ``{"value": n}``."""
    total = response["hits"]["total"]
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total or 0)


def flattened_sources(response: Response) -> list[dict[str, Any]]:
    """The ``_source`` of every hit with single-valued lists made scalar."""
    return [single_valued_to_scalar(hit["_source"]) for hit in response["hits"]["hits"]]


class QuerySet:
    """Base class binding a query set to one collection and an executor.

    Without an explicit ``collection`` the name is read from the settings
    attribute named by ``collection_setting``.
    """

    # Settings attribute naming this query set's collection
    collection_setting: ClassVar[str]

    def __init__(self, executor: AbstractQueryExecutor, collection: str | None = None):
        self.executor = executor
        self.collection = collection or getattr(get_settings(), self.collection_setting)

    @classmethod
    def from_settings(cls, executor: AbstractQueryExecutor, settings: Settings | None = None):
        settings = settings or get_settings()
        return cls(executor, collection=getattr(settings, cls.collection_setting))

    def _execute(self, operation: str, query: dict[str, Any]) -> Response:
        """Run a query inside a span. Failures are recorded and re-raised."""
        attributes = {"db.collection": self.collection, "db.operation": operation}
        span_name = f"{self.collection}.{operation}"
        with query_context(self.collection, operation), create_span(span_name, attributes=attributes) as span:
            response = self.executor.execute(self.collection, query)
            total = total_hits(response)
            span.set_attribute("db.hits.total", total)
            logger.debug(
                "%s.%s matched %d document(s) in %sms",
                self.collection,
                operation,
                total,
                response.get("took"),
            )
            return response
