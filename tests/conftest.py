"""Shared test fixtures and configuration."""

import os

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
import pytest

from cpanmeta.adapters.executor import StaticQueryExecutor
from cpanmeta.observability import tracing as tracing_module
from cpanmeta.observability.context import trace_context


# Complete test environment that overrides every config value
TEST_ENV = {
    "CPANMETA_ES_URL": "http://search.test:9200",
    "CPANMETA_INDEX_NAME": "cpan",
    "CPANMETA_AUTHOR_COLLECTION": "author",
    "CPANMETA_FAVORITE_COLLECTION": "favorite",
    "CPANMETA_HTTP_TIMEOUT": "5",
    "CPANMETA_LOG_LEVEL": "info",
    "CPANMETA_LOG_JSON": "true",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset environment variables and the trace context before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    token = trace_context.set(None)
    yield
    trace_context.reset(token)


@pytest.fixture
def span_exporter():
    """Route spans from query sets into an in-memory exporter."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    tracing_module.init_tracing(provider=provider)
    yield exporter
    tracing_module._tracer_holder["tracer"] = None
    exporter.clear()


@pytest.fixture
def valid_author_input():
    """A fully well-formed author record as delivered by the importer."""
    return {
        "name": "Perl Perler",
        "asciiname": "Perl Perler",
        "website": ["https://perler.example.org/"],
        "email": ["perler@example.org"],
        "pauseid": "PERLER",
        "profile": [
            {"name": "github", "id": "perler"},
            {"name": "stackoverflow", "id": "perl-perler"},
        ],
        "blog": [{"feed": "https://blogs.example.org/perler/atom.xml", "url": "https://blogs.example.org/perler/"}],
        "perlmongers": {"name": "Frankfurt.pm", "url": "http://frankfurt.pm"},
        "donation": [{"name": "paypal", "id": "perler@example.org"}],
        "city": "Frankfurt",
        "region": "Hesse",
        "country": "DE",
        "location": [8.6821, 50.1109],
        "extra": {"irc": "perler", "languages": ["perl", "c"]},
        "updated": "2024-05-01T12:00:00",
        "is_pause_custodial_account": False,
    }


def _search_response(hits, took=4, total=None):
    return {
        "took": took,
        "hits": {"total": len(hits) if total is None else total, "hits": hits},
    }


@pytest.fixture
def search_response():
    """Factory building a backend response around a list of hits."""
    return _search_response


@pytest.fixture
def make_executor():
    """Factory for a StaticQueryExecutor answering one collection."""

    def _make(collection, response):
        return StaticQueryExecutor({collection: response})

    return _make
