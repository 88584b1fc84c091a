"""Query execution interface and its implementations.

Separates "run this structured query against a collection" from the code
that builds the queries. Implementations return the backend's response
body::

    {"took": 3, "hits": {"total": 1, "hits": [{"_id": .., "_source": {..}}]}}

Errors are never caught here beyond turning an unusable body into
``MalformedResponseError``: connection failures and HTTP errors reach the
caller unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
import copy
import logging
from typing import Any

import httpx

from cpanmeta.config import Settings, get_settings
from cpanmeta.errors import MalformedResponseError


logger = logging.getLogger(__name__)

Response = dict[str, Any]


def empty_response(took: int = 0) -> Response:
    """A search response with no hits."""
    return {"took": took, "hits": {"total": 0, "hits": []}}


class AbstractQueryExecutor(ABC):
    """Runs structured queries against one collection of the search backend."""

    @abstractmethod
    def execute(self, collection: str, query: dict[str, Any]) -> Response:
        """Run ``query`` against ``collection``.

        Args:
            collection: Collection (document type) name, e.g. "author"
            query: Search request body (query, size, from, sort, aggs)

        Returns:
            Response body with ``hits.total``, ``hits.hits`` and ``took``
        """
        raise NotImplementedError


class HttpQueryExecutor(AbstractQueryExecutor):
    """Executor talking to an Elasticsearch-compatible ``_search`` endpoint."""

    def __init__(self, settings: Settings | None = None, client: httpx.Client | None = None):
        """Initialize the executor.

        Args:
            settings: Backend location and timeout (default: loaded from the environment)
            client: Preconfigured HTTP client; when omitted one is created and owned here
        """
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self.settings.http_timeout)

    def execute(self, collection: str, query: dict[str, Any]) -> Response:
        url = self.settings.search_url(collection)
        logger.debug("POST %s", url)
        response = self._client.post(url, json=query)
        response.raise_for_status()

        try:
            body = response.json()
        except ValueError as exc:
            msg = f"Search response from {url} is not JSON"
            raise MalformedResponseError(msg) from exc

        if not isinstance(body, dict) or not isinstance(body.get("hits"), dict):
            msg = f"Search response from {url} has no 'hits' object"
            raise MalformedResponseError(msg)
        return body

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpQueryExecutor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class StaticQueryExecutor(AbstractQueryExecutor):
    """In-memory executor returning canned responses.

    Every call is recorded in ``calls`` as ``(collection, query)``. A
    response may be a mapping or a callable receiving the query; a
    collection without a response gets ``empty_response()``.
    """

    def __init__(
        self,
        responses: Mapping[str, Response | Callable[[dict[str, Any]], Response]] | None = None,
    ):
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def execute(self, collection: str, query: dict[str, Any]) -> Response:
        self.calls.append((collection, copy.deepcopy(query)))
        response = self.responses.get(collection)
        if response is None:
            return empty_response()
        if callable(response):
            return response(query)
        return copy.deepcopy(response)

    @property
    def last_query(self) -> dict[str, Any] | None:
        return self.calls[-1][1] if self.calls else None
