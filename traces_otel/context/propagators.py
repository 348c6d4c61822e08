"""Trace context propagation using OpenTelemetry's text map propagators."""

from __future__ import annotations

import logging
from typing import Any, Dict, MutableMapping, Mapping, Optional

from opentelemetry import context as context_api
from opentelemetry.context import Context as OTelContext
from opentelemetry.propagate import get_global_textmap
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace import SpanContext as OTelSpanContext, TraceFlags, TraceState

from traces_otel.context.context import SAMPLED, Context
from traces_otel.utils.helpers import format_trace_id, format_span_id, parse_trace_id, parse_span_id

logger = logging.getLogger(__name__)


def format_tracestate(state: Dict[str, str]) -> str:
    """
    Format tracestate header value from a dict.

    Formats according to W3C Trace Context standard.
    """
    if not state:
        return ""

    items = []
    for k, v in state.items():
        key = str(k).strip().lower()[:256]
        value = str(v).strip().replace(",", "_").replace("=", "_")[:256]
        if key and value:
            items.append(f"{key}={value}")

    return ",".join(items)


def parse_tracestate(header_value: Optional[str]) -> Dict[str, str]:
    """
    Parse a tracestate header into a dict.

    Parses W3C Trace Context tracestate format: key1=value1,key2=value2
    """
    if not header_value:
        return {}

    result = {}
    for item in header_value.split(","):
        item = item.strip()
        if not item or "=" not in item:
            continue
        key, value = item.split("=", 1)
        key = key.strip().lower()
        value = value.strip()
        if key and value:
            result[key] = value

    return result


def to_trace_state(state: Optional[str]) -> TraceState:
    """
    Convert a tracestate header string into a native TraceState.

    Validation is left to OpenTelemetry: a header it rejects yields an
    empty TraceState rather than a rewritten one.
    """
    if not state:
        return TraceState()
    return TraceState.from_header([state])


def from_trace_state(trace_state: Optional[TraceState]) -> Optional[str]:
    """Format a native TraceState to its header string, or None when empty."""
    if not trace_state:
        return None
    return trace_state.to_header() or None


def to_span_context(context: Context) -> OTelSpanContext:
    """
    Convert a generic Context into an OpenTelemetry SpanContext.

    The full flags byte is carried over so reserved bits survive.
    """
    return OTelSpanContext(
        trace_id=parse_trace_id(context.trace_id),
        span_id=parse_span_id(context.parent_id),
        is_remote=context.is_remote(),
        trace_flags=TraceFlags(context.flags & 0xff),
        trace_state=to_trace_state(context.state),
    )


def from_span_context(span_context: OTelSpanContext, native: Optional[OTelContext] = None) -> Context:
    """
    Convert an OpenTelemetry SpanContext into a generic Context.

    Only the sampled bit is reported in `flags`.
    """
    return Context(
        trace_id=format_trace_id(span_context.trace_id),
        parent_id=format_span_id(span_context.span_id),
        flags=SAMPLED if span_context.trace_flags.sampled else 0,
        state=from_trace_state(span_context.trace_state),
        remote=span_context.is_remote,
        context=native,
    )


def inject(
    carrier: Optional[MutableMapping[str, str]] = None,
    context: Optional[OTelContext] = None,
    propagator: Optional[TextMapPropagator] = None,
) -> Optional[MutableMapping[str, str]]:
    """
    Inject trace context into `carrier`.

    The propagator writes into a scratch carrier first; its entries are then
    merged into `carrier`. Returns None when the propagator had nothing to
    write, otherwise the (possibly newly created) carrier.
    """
    propagator = propagator or get_global_textmap()

    written: Dict[str, str] = {}
    propagator.inject(written, context=context)

    if not written:
        logger.debug("No trace context to inject")
        return None

    if carrier is None:
        carrier = {}
    carrier.update(written)
    return carrier


def extract(
    carrier: Mapping[str, Any],
    context: Optional[OTelContext] = None,
    propagator: Optional[TextMapPropagator] = None,
) -> OTelContext:
    """
    Extract trace context from `carrier`.

    Extraction is layered on top of `context` (the current context when
    omitted). Missing or malformed headers leave that context untouched and
    it is returned as-is.
    """
    propagator = propagator or get_global_textmap()
    if context is None:
        context = context_api.get_current()

    extracted = propagator.extract(carrier, context=context)
    if extracted is context:
        logger.debug("No trace context found in carrier")
    return extracted
