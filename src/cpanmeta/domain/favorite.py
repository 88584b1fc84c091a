"""Favorite document - a user's ++ on a distribution.

Favorites are written elsewhere; this package only reads them. A favorite
is identified by the pair (user, distribution). Favorite query results are
shaped through this record, so unknown keys in a hit are dropped.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Favorite:
    """Read-only projection of one favorite."""

    user: str
    distribution: str
    id: str | None = None
    release: str | None = None
    author: str | None = None
    date: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.user, self.distribution)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "user": self.user,
            "distribution": self.distribution,
            "release": self.release,
            "author": self.author,
            "date": self.date,
        }
        return {key: value for key, value in data.items() if value is not None}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Favorite:
        return cls(
            user=data["user"],
            distribution=data["distribution"],
            id=data.get("id"),
            release=data.get("release"),
            author=data.get("author"),
            date=data.get("date"),
        )
