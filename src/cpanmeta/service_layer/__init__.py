"""Query sets: read operations over the author and favorite collections.

Each operation translates a high-level request into a structured query,
runs it through an ``AbstractQueryExecutor`` and normalizes the hits into
a plain mapping. An empty mapping means "no content"; executor failures
propagate to the caller.
"""

from cpanmeta.service_layer.author_queries import AuthorQuerySet
from cpanmeta.service_layer.favorite_queries import FavoriteQuerySet


__all__ = ["AuthorQuerySet", "FavoriteQuerySet"]
