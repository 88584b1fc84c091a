"""Read operations over the favorite collection.

Favorites are keyed by (user, distribution). Besides the single lookup,
four aggregate views are offered: a user's favorites, the users who
favorited a distribution, the most recent favorites and the leaderboard
of most favorited distributions.
"""

from __future__ import annotations

import logging
from typing import Any

from cpanmeta.adapters.executor import Response
from cpanmeta.domain.favorite import Favorite
from cpanmeta.service_layer.base import QuerySet, flattened_sources, total_hits
from cpanmeta.utils.flatten import single_valued_to_scalar


logger = logging.getLogger(__name__)

BY_USER_SIZE = 250
USERS_BY_DISTRIBUTION_SIZE = 1000
RECENT_PAGE_SIZE = 100
LEADERBOARD_SIZE = 100


def favorite_documents(response: Response, **known: str) -> list[dict[str, Any]]:
    """Hit sources shaped as favorite records.

    ``known`` fills identity fields a projection left out of ``_source``.
    """
    return [Favorite.from_dict({**known, **source}).to_dict() for source in flattened_sources(response)]


class FavoriteQuerySet(QuerySet):
    """Lookups over favorite documents."""

    collection_setting = "favorite_collection"

    def find(self, user: str, distribution: str) -> dict[str, Any]:
        """The favorite ``user`` gave ``distribution``, or ``{}``.

        Hits returned with stored ``fields`` instead of ``_source`` are
        flattened so single values come back as scalars.
        """
        query = {
            "query": {
                "bool": {
                    "must": [
                        {"term": {"user": user}},
                        {"term": {"distribution": distribution}},
                    ]
                }
            },
            "size": 1,
        }
        response = self._execute("find", query)
        hits = response["hits"]["hits"]
        if not total_hits(response) or not hits:
            return {}

        hit = hits[0]
        source = hit.get("_source") or single_valued_to_scalar(hit.get("fields"))
        if not source:
            return {}
        return Favorite.from_dict({"user": user, "distribution": distribution, **source}).to_dict()

    def by_user(self, user: str, size: int | None = None) -> dict[str, Any]:
        """Distributions favorited by ``user``, ordered by distribution name.

        The query projects ``user`` away; it is restored on every record.

        Returns:
            ``{"favorites": [...], "took": ms, "total": n}``, or ``{}``
        """
        query = {
            "query": {"term": {"user": user}},
            "_source": ["author", "date", "distribution"],
            "sort": [{"distribution": "asc"}],
            "size": size or BY_USER_SIZE,
        }
        response = self._execute("by_user", query)
        total = total_hits(response)
        if not total:
            return {}

        return {
            "favorites": favorite_documents(response, user=user),
            "took": response.get("took"),
            "total": total,
        }

    def users_by_distribution(self, distribution: str) -> dict[str, Any]:
        """Sorted, distinct users who favorited ``distribution``.

        Returns:
            ``{"users": [...]}``, or ``{}``
        """
        query = {
            "query": {"term": {"distribution": distribution}},
            "_source": ["user"],
            "size": USERS_BY_DISTRIBUTION_SIZE,
        }
        response = self._execute("users_by_distribution", query)
        if not total_hits(response):
            return {}

        users = {source["user"] for source in flattened_sources(response) if source.get("user")}
        return {"users": sorted(users)}

    def recent(self, page: int | None = None, size: int | None = None) -> dict[str, Any]:
        """All favorites, newest first, one page at a time.

        Args:
            page: 1-based page number; falsy values mean 1
            size: Page size; falsy values mean 100

        Returns:
            ``{"favorites": [...], "took": ms, "total": n}``, or ``{}``
        """
        page = page or 1
        size = size or RECENT_PAGE_SIZE
        query = {
            "query": {"match_all": {}},
            "sort": [{"date": "desc"}],
            "size": size,
            "from": (page - 1) * size,
        }
        response = self._execute("recent", query)
        total = total_hits(response)
        if not total:
            return {}

        return {
            "favorites": favorite_documents(response),
            "took": response.get("took"),
            "total": total,
        }

    def leaderboard(self) -> dict[str, Any]:
        """Most favorited distributions with their favorite counts.

        Returns:
            ``{"leaderboard": [{"key": dist, "doc_count": n}, ...], "took": ms, "total": n}``,
            or ``{}`` when there are no favorites
        """
        query = {
            "size": 0,
            "query": {"match_all": {}},
            "aggregations": {
                "leaderboard": {"terms": {"field": "distribution", "size": LEADERBOARD_SIZE}},
            },
        }
        response = self._execute("leaderboard", query)
        buckets = response.get("aggregations", {}).get("leaderboard", {}).get("buckets", [])
        if not buckets:
            return {}

        return {
            "leaderboard": buckets,
            "took": response.get("took"),
            "total": total_hits(response),
        }
