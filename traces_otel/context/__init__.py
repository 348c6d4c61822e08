"""Context value and propagation utilities."""

from traces_otel.context.context import SAMPLED, Context
from traces_otel.context.propagators import (
    extract,
    format_tracestate,
    from_span_context,
    from_trace_state,
    inject,
    parse_tracestate,
    to_span_context,
    to_trace_state,
)

__all__ = [
    "SAMPLED",
    "Context",
    "format_tracestate",
    "parse_tracestate",
    "to_trace_state",
    "from_trace_state",
    "to_span_context",
    "from_span_context",
    "inject",
    "extract",
]
