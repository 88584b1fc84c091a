"""Unit tests for the config module."""

from pydantic import ValidationError
import pytest

from cpanmeta.config import Settings, get_settings


pytestmark = pytest.mark.unit


class TestConfig:
    """Test Settings loading."""

    def test_values_come_from_environment(self):
        """Test values are read from CPANMETA_* variables."""
        settings = get_settings()

        assert settings.es_url == "http://search.test:9200"
        assert settings.http_timeout == 5
        assert settings.log_json is True

    def test_environment_override(self, monkeypatch):
        """Test an environment variable overrides the default."""
        monkeypatch.setenv("CPANMETA_INDEX_NAME", "cpan_v2")

        assert Settings().index_name == "cpan_v2"

    def test_defaults_without_environment(self, monkeypatch):
        """Test defaults apply when nothing is set."""
        for key in ("CPANMETA_ES_URL", "CPANMETA_AUTHOR_COLLECTION", "CPANMETA_HTTP_TIMEOUT"):
            monkeypatch.delenv(key)

        settings = Settings(_env_file=None)

        assert settings.es_url == "http://127.0.0.1:9200"
        assert settings.author_collection == "author"
        assert settings.http_timeout == 30

    def test_search_url(self):
        """Test the _search endpoint URL for a collection."""
        settings = Settings(es_url="http://es.local:9200/", index_name="cpan")

        assert settings.search_url("favorite") == "http://es.local:9200/cpan/favorite/_search"

    def test_timeout_must_be_positive(self):
        """Test a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            Settings(http_timeout=0)

    def test_empty_collection_rejected(self):
        """Test an empty collection name is rejected."""
        with pytest.raises(ValidationError):
            Settings(author_collection="")
