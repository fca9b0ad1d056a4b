"""Observability: OpenTelemetry tracing and structlog integration."""

from supabase_ai.infrastructure.observability.setup import (
    configure_logging,
    init_observability,
    shutdown_observability,
)
from supabase_ai.infrastructure.observability.tracing import (
    add_span_attributes,
    add_trace_context,
    get_current_span_id,
    get_current_trace_id,
    get_tracer,
    traced,
)

__all__ = [
    "add_span_attributes",
    "add_trace_context",
    "configure_logging",
    "get_current_span_id",
    "get_current_trace_id",
    "get_tracer",
    "init_observability",
    "shutdown_observability",
    "traced",
]
