"""Read operations over the author collection."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any

from cpanmeta.service_layer.base import QuerySet, flattened_sources, total_hits
from cpanmeta.utils.flatten import single_valued_to_scalar


logger = logging.getLogger(__name__)

BY_USER_SIZE = 100
SEARCH_PAGE_SIZE = 10


def build_by_user_query(users: Sequence[str]) -> dict[str, Any]:
    """Match authors linked to any of ``users``."""
    return {
        "query": {"terms": {"user": list(users)}},
        "size": BY_USER_SIZE,
    }


def build_search_query(query: str, from_: int | None = 0) -> dict[str, Any]:
    """
    Free-text author search.

    Any of four clauses may match:
    - every term of ``query`` in the analyzed name
    - every term of ``query`` in the analyzed ASCII name
    - the PAUSE id, upper-cased
    - a profile id (e.g. a GitHub login), lower-cased
    """
    return {
        "query": {
            "bool": {
                "should": [
                    {"match": {"name.analyzed": {"query": query, "operator": "and"}}},
                    {"match": {"asciiname.analyzed": {"query": query, "operator": "and"}}},
                    {"match": {"pauseid": query.upper()}},
                    {"match": {"profile.id": query.lower()}},
                ]
            }
        },
        "size": SEARCH_PAGE_SIZE,
        "from": from_ or 0,
    }


class AuthorQuerySet(QuerySet):
    """Lookups and search over author documents."""

    collection_setting = "author_collection"

    def by_user(self, users: str | Sequence[str]) -> dict[str, Any]:
        """Authors linked to one or more site users.

        Args:
            users: A user id or a sequence of user ids

        Returns:
            ``{"authors": [...]}``, or ``{}`` when nothing matches
        """
        if isinstance(users, str):
            users = [users]

        response = self._execute("by_user", build_by_user_query(users))
        if not total_hits(response):
            return {}

        return {"authors": flattened_sources(response)}

    def search(self, query: str, from_: int | None = 0) -> dict[str, Any]:
        """Search authors by name, ASCII name, PAUSE id or profile id.

        Args:
            query: Free text entered by the user
            from_: Pagination offset; falsy values mean 0

        Returns:
            ``{"authors": [...], "took": ms, "total": n}`` where each author
            carries its document key as ``id``, or ``{}`` when nothing matches
        """
        response = self._execute("search", build_search_query(query, from_))
        total = total_hits(response)
        if not total:
            return {}

        authors = [
            {**single_valued_to_scalar(hit["_source"]), "id": hit["_id"]}
            for hit in response["hits"]["hits"]
        ]
        return {
            "authors": authors,
            "took": response.get("took"),
            "total": total,
        }
