"""Author document - a CPAN author as stored in the ``author`` collection.

Construction is lenient: missing required fields and mistyped values are
accepted so that partially built records can exist while an import is in
progress. ``Author.validate`` (or ``cpanmeta.domain.validation.validate``)
is the enforcement point.

Example profile value::

    [{"name": "amazon", "id": "B002MRC39U"},
     {"name": "stackoverflow", "id": "brian-d-foy"}]

A single ``{"name": .., "id": ..}`` object is coerced into a one-element
list, as are a bare ``blog`` or ``perlmongers`` object and a bare
``website``/``email`` string.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
import logging
from typing import Any

from cpanmeta.domain.validation import Violation, validate
from cpanmeta.search.constraints import (
    ArrayOf,
    Bool,
    CoercibleSequence,
    HashRef,
    Location,
    NonEmptyString,
    Str,
    StructuredDict,
)
from cpanmeta.search.schema import FieldDescriptor, IndexType, Schema
from cpanmeta.utils import gravatar


logger = logging.getLogger(__name__)

GRAVATAR_SIZE = 130
GRAVATAR_DEFAULT = "identicon"

_NAME_AND_ID = StructuredDict.of(name=NonEmptyString(), id=Str())

AUTHOR_SCHEMA = Schema(
    name="author",
    unique_field="pauseid",
    fields=[
        FieldDescriptor("name", NonEmptyString(), required=True, index=IndexType.ANALYZED),
        FieldDescriptor("asciiname", Str(), required=True, default="", index=IndexType.ANALYZED),
        FieldDescriptor("website", CoercibleSequence(Str()), required=True, coerce=True),
        FieldDescriptor("email", CoercibleSequence(Str()), required=True, coerce=True),
        FieldDescriptor("pauseid", Str(), required=True, is_id=True),
        FieldDescriptor("user", Str()),
        FieldDescriptor("gravatar_url", NonEmptyString(), derived=True),
        FieldDescriptor(
            "profile",
            CoercibleSequence(_NAME_AND_ID),
            coerce=True,
            index=IndexType.NESTED,
            include_in_root=True,
        ),
        FieldDescriptor(
            "blog",
            CoercibleSequence(StructuredDict.of(feed=Str(), url=Str(), optional=("feed", "url"))),
            coerce=True,
            dynamic=True,
        ),
        FieldDescriptor(
            "perlmongers",
            CoercibleSequence(StructuredDict.of(name=NonEmptyString(), url=Str(), optional=("url",))),
            coerce=True,
            dynamic=True,
        ),
        FieldDescriptor("donation", ArrayOf(_NAME_AND_ID), dynamic=True),
        FieldDescriptor("city", NonEmptyString()),
        FieldDescriptor("region", NonEmptyString()),
        FieldDescriptor("country", NonEmptyString()),
        FieldDescriptor("location", Location(), coerce=True),
        FieldDescriptor("extra", HashRef(), index=IndexType.SOURCE_ONLY, dynamic=True),
        FieldDescriptor("updated", Str()),
        FieldDescriptor("is_pause_custodial_account", Bool(), default=False),
    ],
)


@dataclass(frozen=True, eq=False)
class Author:
    """Aggregate root for a CPAN author.

    Identity is the PAUSE id: two authors are equal when their ``pauseid``
    matches. Instances are frozen; the only sanctioned mutation is
    ``link_user``, run when a PAUSE account is tied to a site user.

    ``gravatar_url`` is derived from ``pauseid`` on first access and cached
    on the instance. It is never taken from input.
    """

    pauseid: str | None = None
    name: str | None = None
    asciiname: str = ""
    website: list[str] | None = None
    email: list[str] | None = None
    profile: list[dict[str, Any]] | None = None
    blog: list[dict[str, Any]] | None = None
    perlmongers: list[dict[str, Any]] | None = None
    donation: list[dict[str, Any]] | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    location: list[float] | None = None
    extra: dict[str, Any] | None = None
    updated: str | None = None
    is_pause_custodial_account: bool = False
    user: str | None = field(default=None, init=False)
    _gravatar_url: str | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Apply schema defaults and construction-time coercion."""
        for descriptor in AUTHOR_SCHEMA:
            if descriptor.derived or descriptor.name == "user":
                continue
            value = getattr(self, descriptor.name)
            if value is None:
                if descriptor.default is not None:
                    object.__setattr__(self, descriptor.name, descriptor.default)
            elif descriptor.coerce:
                object.__setattr__(self, descriptor.name, descriptor.prepare(value))

    def __eq__(self, other: object) -> bool:
        """Authors are equal if they have the same PAUSE id (identity).

        A record without a PAUSE id is only equal to itself.
        """
        if not isinstance(other, Author):
            return NotImplemented
        if self.pauseid is None or other.pauseid is None:
            return self is other
        return self.pauseid == other.pauseid

    def __hash__(self) -> int:
        """Hash based on PAUSE id (identity)."""
        if self.pauseid is None:
            return id(self)
        return hash(self.pauseid)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Author:
        """Build an author from import data.

        Unknown keys are ignored, as are ``user`` (set by ``link_user``) and
        ``gravatar_url`` (derived). Nothing is validated here.
        """
        if "gravatar_url" in data:
            logger.debug("Ignoring supplied gravatar_url for %s", data.get("pauseid"))
        accepted = {f.name for f in fields(cls) if f.init}
        return cls(**{key: value for key, value in data.items() if key in accepted})

    @classmethod
    def validate(cls, data: Mapping[str, Any]) -> list[Violation]:
        """Validate raw input against ``AUTHOR_SCHEMA``."""
        return validate(AUTHOR_SCHEMA, data)

    @property
    def gravatar_url(self) -> str:
        cached = self._gravatar_url
        if cached is None:
            cached = self._build_gravatar_url()
            object.__setattr__(self, "_gravatar_url", cached)
        return cached

    def _build_gravatar_url(self) -> str:
        # The CPAN address is used rather than a personal e-mail so the
        # avatar follows the author's CPAN identity.
        if not self.pauseid:
            raise ValueError("gravatar_url requires a pauseid")
        return gravatar.gravatar_url(
            f"{self.pauseid}@cpan.org",
            size=GRAVATAR_SIZE,
            default=GRAVATAR_DEFAULT,
            https=True,
        )

    def link_user(self, user: str) -> None:
        """Tie this author to a site user account."""
        object.__setattr__(self, "user", user)

    def to_dict(self) -> dict[str, Any]:
        """Document source for indexing. ``None`` values are left out."""
        document: dict[str, Any] = {}
        for descriptor in AUTHOR_SCHEMA:
            if descriptor.derived:
                if self.pauseid:
                    document[descriptor.name] = getattr(self, descriptor.name)
                continue
            value = getattr(self, descriptor.name)
            if value is not None:
                document[descriptor.name] = value
        return document
