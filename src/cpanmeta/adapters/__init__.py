"""Adapters for the query execution interface."""

from cpanmeta.adapters.executor import (
    AbstractQueryExecutor,
    HttpQueryExecutor,
    StaticQueryExecutor,
    empty_response,
)


__all__ = [
    "AbstractQueryExecutor",
    "HttpQueryExecutor",
    "StaticQueryExecutor",
    "empty_response",
]
