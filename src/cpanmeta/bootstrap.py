"""Wiring of settings, observability, executor and query sets."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from cpanmeta.adapters.executor import AbstractQueryExecutor, HttpQueryExecutor
from cpanmeta.config import Settings, get_settings
from cpanmeta.observability import configure_logging, init_tracing
from cpanmeta.service_layer.author_queries import AuthorQuerySet
from cpanmeta.service_layer.favorite_queries import FavoriteQuerySet


logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Query sets sharing one executor."""

    settings: Settings
    executor: AbstractQueryExecutor
    authors: AuthorQuerySet
    favorites: FavoriteQuerySet

    def close(self) -> None:
        if isinstance(self.executor, HttpQueryExecutor):
            self.executor.close()


def build_services(
    settings: Settings | None = None,
    executor: AbstractQueryExecutor | None = None,
    *,
    configure_logs: bool = True,
    configure_tracing: bool = True,
) -> Services:
    """Build the query sets from settings.

    Args:
        settings: Configuration (default: loaded from the environment)
        executor: Query executor (default: HTTP executor against ``settings.es_url``)
        configure_logs: Install the root log handler from ``settings.log_level``/``log_json``
        configure_tracing: Install the global OpenTelemetry tracer provider
    """
    settings = settings or get_settings()
    if configure_logs:
        configure_logging(level=settings.log_level, json_output=settings.log_json)
    if configure_tracing:
        init_tracing(service_name="cpanmeta", resource_attributes={"cpanmeta.index": settings.index_name})

    executor = executor or HttpQueryExecutor(settings)
    logger.info(
        "Query sets ready for %s (index=%s)",
        settings.es_url,
        settings.index_name,
    )
    return Services(
        settings=settings,
        executor=executor,
        authors=AuthorQuerySet.from_settings(executor, settings),
        favorites=FavoriteQuerySet.from_settings(executor, settings),
    )
