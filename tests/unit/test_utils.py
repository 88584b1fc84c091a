"""Unit tests for gravatar and result flattening helpers."""

import hashlib

import pytest

from cpanmeta.utils.flatten import single_valued_to_scalar
from cpanmeta.utils.gravatar import gravatar_hash, gravatar_url


pytestmark = pytest.mark.unit


class TestGravatar:
    """Test gravatar hashing and URLs."""

    def test_hash_normalizes_address(self):
        """Test the address is trimmed and lowercased before hashing."""
        assert gravatar_hash(" PERLER@cpan.org ") == hashlib.md5(b"perler@cpan.org").hexdigest()

    def test_secure_url_with_size_and_fallback(self):
        """Test the secure URL carries size and fallback parameters."""
        url = gravatar_url("PERLER@cpan.org", size=130, default="identicon")

        assert url == f"https://secure.gravatar.com/avatar/{gravatar_hash('perler@cpan.org')}?s=130&d=identicon"

    def test_plain_url_without_parameters(self):
        """Test the plain URL has no query string."""
        url = gravatar_url("perler@cpan.org", https=False)

        assert url == f"http://www.gravatar.com/avatar/{gravatar_hash('perler@cpan.org')}"


class TestSingleValuedToScalar:
    """Test flattening of search hit fields."""

    def test_single_element_lists_become_scalars(self):
        """Test only one-element lists are collapsed."""
        document = {"email": ["a@x.org"], "website": ["a", "b"], "name": "A", "profile": [], "extra": {"k": ["v"]}}

        result = single_valued_to_scalar(document)

        assert result is document
        assert document == {"email": "a@x.org", "website": ["a", "b"], "name": "A", "profile": [], "extra": {"k": ["v"]}}

    def test_none_passes_through(self):
        """Test None is returned unchanged."""
        assert single_valued_to_scalar(None) is None
