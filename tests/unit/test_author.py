"""Unit tests for the Author document."""

from dataclasses import FrozenInstanceError
import hashlib

import pytest

from cpanmeta.domain.author import Author
from cpanmeta.utils import gravatar


pytestmark = pytest.mark.unit

PERLER_AVATAR = (
    "https://secure.gravatar.com/avatar/"
    + hashlib.md5(b"perler@cpan.org").hexdigest()
    + "?s=130&d=identicon"
)


class TestConstruction:
    """Test building authors from import data."""

    def test_from_dict_keeps_well_formed_values(self, valid_author_input):
        """Test well-formed values are stored unchanged."""
        author = Author.from_dict(valid_author_input)

        assert author.pauseid == "PERLER"
        assert author.name == "Perl Perler"
        assert author.profile == valid_author_input["profile"]
        assert author.location == [8.6821, 50.1109]
        assert author.extra == {"irc": "perler", "languages": ["perl", "c"]}

    def test_scalar_website_and_email_are_wrapped(self):
        """Test a bare website or email string becomes a list."""
        author = Author.from_dict({"pauseid": "PERLER", "website": "https://perler.example.org/", "email": "p@x.org"})

        assert author.website == ["https://perler.example.org/"]
        assert author.email == ["p@x.org"]

    def test_scalar_and_sequence_inputs_build_the_same_record(self):
        """Test scalar and one-element list inputs are equivalent."""
        from_scalar = Author.from_dict({"pauseid": "PERLER", "email": "p@x.org", "profile": {"name": "github", "id": "p"}})
        from_list = Author.from_dict({"pauseid": "PERLER", "email": ["p@x.org"], "profile": [{"name": "github", "id": "p"}]})

        assert from_scalar.to_dict() == from_list.to_dict()

    def test_single_blog_and_perlmongers_objects_are_wrapped(self):
        """Test bare blog and perlmongers objects become lists."""
        author = Author(
            pauseid="PERLER",
            blog={"url": "https://blogs.example.org/perler/"},
            perlmongers={"name": "Frankfurt.pm"},
        )

        assert author.blog == [{"url": "https://blogs.example.org/perler/"}]
        assert author.perlmongers == [{"name": "Frankfurt.pm"}]

    def test_location_mapping_is_coerced(self):
        """Test a lat/lon mapping becomes a [lon, lat] pair."""
        author = Author(pauseid="PERLER", location={"lat": 50.1109, "lon": 8.6821})

        assert author.location == [8.6821, 50.1109]

    def test_defaults(self):
        """Test schema defaults for optional fields."""
        author = Author(pauseid="PERLER")

        assert author.asciiname == ""
        assert author.is_pause_custodial_account is False
        assert author.user is None

    def test_explicit_none_falls_back_to_default(self):
        """Test None is replaced by the field default."""
        author = Author.from_dict({"pauseid": "PERLER", "asciiname": None})

        assert author.asciiname == ""

    def test_construction_is_lenient(self):
        """Test malformed records can still be built."""
        author = Author.from_dict({"pauseid": "PERLER", "name": "", "website": 42})

        assert author.name == ""
        assert author.website == 42
        assert author.email is None

    def test_unknown_and_internal_keys_are_ignored(self):
        """Test unknown keys, user and gravatar_url are not taken from input."""
        author = Author.from_dict({"pauseid": "PERLER", "user": "someone", "dir": "id/P/PE/PERLER"})

        assert author.user is None
        assert not hasattr(author, "dir")


class TestImmutability:
    """Test authors cannot be modified after construction."""

    def test_pauseid_cannot_be_reassigned(self):
        """Test assigning pauseid raises."""
        author = Author(pauseid="PERLER")

        with pytest.raises(FrozenInstanceError):
            author.pauseid = "OTHER"  # type: ignore[misc]

    def test_gravatar_url_cannot_be_assigned(self):
        """Test assigning gravatar_url raises."""
        author = Author(pauseid="PERLER")

        with pytest.raises(FrozenInstanceError):
            author.gravatar_url = "https://example.org/me.png"  # type: ignore[misc]

    def test_link_user_is_the_only_mutation(self):
        """Test link_user sets the linked site user."""
        author = Author(pauseid="PERLER")

        author.link_user("x2Yz")

        assert author.user == "x2Yz"

    def test_identity_is_the_pauseid(self):
        """Test equality and hashing follow the PAUSE id."""
        assert Author(pauseid="PERLER", name="A") == Author(pauseid="PERLER", name="B")
        assert Author(pauseid="PERLER") != Author(pauseid="OTHER")
        assert len({Author(pauseid="PERLER"), Author(pauseid="PERLER")}) == 1

    def test_records_without_pauseid_are_distinct(self):
        """Test partially built records without a PAUSE id are only equal to themselves."""
        first, second = Author(name="A"), Author(name="A")

        assert first != second
        assert first == first
        assert first != Author(pauseid="PERLER")
        assert len({first, second}) == 2

    def test_comparison_with_other_types(self):
        """Test an author never equals a plain mapping."""
        assert Author(pauseid="PERLER") != {"pauseid": "PERLER"}


class TestGravatarUrl:
    """Test the derived avatar URL."""

    def test_derived_from_cpan_address(self):
        """Test the URL hashes the author's cpan.org address."""
        assert Author(pauseid="PERLER").gravatar_url == PERLER_AVATAR

    def test_supplied_value_is_ignored(self):
        """Test a gravatar_url in the input has no effect."""
        author = Author.from_dict({"pauseid": "PERLER", "gravatar_url": "https://evil.example.org/x.png"})

        assert author.gravatar_url == PERLER_AVATAR

    def test_deterministic_and_not_the_pauseid(self):
        """Test the URL is stable and does not expose the PAUSE id."""
        author = Author(pauseid="PERLER")

        assert author.gravatar_url == author.gravatar_url
        assert author.gravatar_url != author.pauseid

    def test_computed_once(self, monkeypatch):
        """Test the URL is built on first access only."""
        calls = []
        real = gravatar.gravatar_url

        def counting(*args, **kwargs):
            calls.append(args)
            return real(*args, **kwargs)

        monkeypatch.setattr(gravatar, "gravatar_url", counting)
        author = Author(pauseid="PERLER")

        first = author.gravatar_url
        second = author.gravatar_url

        assert first == second == PERLER_AVATAR
        assert calls == [("PERLER@cpan.org",)]

    def test_requires_pauseid(self):
        """Test reading the URL without a PAUSE id raises."""
        with pytest.raises(ValueError, match="requires a pauseid"):
            Author(name="Anonymous").gravatar_url  # noqa: B018


class TestSerialization:
    """Test conversion to an index document."""

    def test_to_dict_omits_missing_values_and_adds_gravatar(self):
        """Test unset fields are left out and gravatar_url is added."""
        author = Author.from_dict({"pauseid": "PERLER", "name": "Perl Perler", "email": "p@x.org"})

        assert author.to_dict() == {
            "name": "Perl Perler",
            "asciiname": "",
            "email": ["p@x.org"],
            "pauseid": "PERLER",
            "gravatar_url": PERLER_AVATAR,
            "is_pause_custodial_account": False,
        }

    def test_to_dict_includes_linked_user(self):
        """Test a linked user is serialized."""
        author = Author(pauseid="PERLER")
        author.link_user("x2Yz")

        assert author.to_dict()["user"] == "x2Yz"

    def test_to_dict_without_pauseid_skips_gravatar(self):
        """Test no gravatar_url is written without a PAUSE id."""
        assert "gravatar_url" not in Author(name="Anonymous").to_dict()
