"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from near_proximity.observability.context import get_trace_context, set_trace_context, trace_context
from near_proximity.observability.logging import JsonFormatter, configure_logging
from near_proximity.observability.metrics import (
    ENUMERATION_LATENCY,
    KEYWORD_COUNT,
    WINDOWS_EMITTED,
    get_metrics,
    get_metrics_content_type,
    init_metrics,
    track_latency,
)
from near_proximity.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "ENUMERATION_LATENCY",
    "KEYWORD_COUNT",
    "WINDOWS_EMITTED",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
