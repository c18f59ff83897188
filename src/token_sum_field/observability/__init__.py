"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from token_sum_field.observability.context import bind_field, get_trace_context, trace_context
from token_sum_field.observability.logging import JsonFormatter, configure_logging
from token_sum_field.observability.metrics import (
    DOCUMENT_INDEX_LATENCY,
    FIELDS_ENCODED,
    FORMAT_ERRORS,
    init_metrics,
    track_latency,
)
from token_sum_field.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "DOCUMENT_INDEX_LATENCY",
    "FIELDS_ENCODED",
    "FORMAT_ERRORS",
    "JsonFormatter",
    "bind_field",
    "configure_logging",
    "create_span",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "trace_context",
    "track_latency",
]
