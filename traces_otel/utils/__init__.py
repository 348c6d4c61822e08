"""Utility functions for traces_otel."""

from traces_otel.utils.helpers import (
    accepts_argument,
    format_trace_id,
    format_span_id,
    parse_trace_id,
    parse_span_id,
)

__all__ = [
    "accepts_argument",
    "format_trace_id",
    "format_span_id",
    "parse_trace_id",
    "parse_span_id",
]
