"""Context propagation for trace correlation in log records.

Besides the trace and span ids, the context carries the collection and
operation of the query currently running, so every log line emitted while
a lookup is in flight can be attributed to it.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4


trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def generate_trace_id() -> str:
    """Generate a 32-char hex trace ID."""
    return uuid4().hex


def generate_span_id() -> str:
    """Generate a 16-char hex span ID."""
    return uuid4().hex[:16]


def get_trace_context() -> dict:
    """Get current trace context, creating ids on first use."""
    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": generate_trace_id(), "span_id": generate_span_id()}
        trace_context.set(ctx)
    return ctx


def update_span_id(span_id: str) -> None:
    """Update span_id while preserving everything else."""
    ctx = trace_context.get() or {}
    trace_context.set({**ctx, "span_id": span_id})


@contextmanager
def query_context(collection: str, operation: str) -> Iterator[dict]:
    """Tag the current context with the query being executed.

    The previous context is restored on exit, including when the query
    raises.
    """
    ctx = get_trace_context()
    token = trace_context.set({**ctx, "collection": collection, "operation": operation})
    try:
        yield trace_context.get()
    finally:
        trace_context.reset(token)
