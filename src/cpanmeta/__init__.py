"""Metadata lookup and search façade for CPAN author and favorite records."""

from cpanmeta.domain.author import AUTHOR_SCHEMA, Author
from cpanmeta.domain.favorite import Favorite
from cpanmeta.domain.validation import Violation, validate
from cpanmeta.service_layer.author_queries import AuthorQuerySet
from cpanmeta.service_layer.favorite_queries import FavoriteQuerySet


__version__ = "0.1.0"

__all__ = [
    "AUTHOR_SCHEMA",
    "Author",
    "AuthorQuerySet",
    "Favorite",
    "FavoriteQuerySet",
    "Violation",
    "validate",
]
