"""Observability module: structured logging and OpenTelemetry tracing."""

from cpanmeta.observability.context import get_trace_context, query_context, trace_context
from cpanmeta.observability.logging import JsonFormatter, configure_logging
from cpanmeta.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "query_context",
    "trace_context",
]
