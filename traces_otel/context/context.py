"""Backend independent trace context value."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from opentelemetry import trace as trace_api
from opentelemetry.context import Context as OTelContext
from opentelemetry.trace import NonRecordingSpan
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

SAMPLED = 0x01

_propagator = TraceContextTextMapPropagator()


@dataclass(frozen=True)
class Context:
    """
    A point-in-time trace identity, independent of any tracing backend.

    Ids are lowercase hex strings, `flags` is the W3C trace-flags byte and
    `state` is the raw tracestate header value. `context` holds the native
    OpenTelemetry context this value was read from, when there is one.
    """

    trace_id: str
    parent_id: str
    flags: int = 0
    state: Optional[str] = None
    remote: bool = False
    context: Optional[OTelContext] = field(default=None, compare=False, repr=False)

    @classmethod
    def parse(
        cls,
        traceparent: Optional[str],
        tracestate: Optional[str] = None,
        remote: bool = False,
    ) -> Optional["Context"]:
        """
        Parse a W3C traceparent header value.

        Parsing is done by OpenTelemetry's trace-context propagator, so the
        same headers are accepted here as by `extract`. Returns None for
        anything it rejects. The full flags byte is kept and `tracestate`
        is stored as given.
        """
        if not traceparent:
            return None

        from traces_otel.context.propagators import from_span_context

        carrier = {"traceparent": traceparent}
        if tracestate:
            carrier["tracestate"] = tracestate

        extracted = _propagator.extract(carrier, context=OTelContext())
        span_context = trace_api.get_current_span(extracted).get_span_context()
        if not span_context.is_valid:
            return None

        return replace(
            from_span_context(span_context),
            flags=int(span_context.trace_flags),
            state=tracestate or None,
            remote=remote,
        )

    @classmethod
    def local(cls, flags: int = 0, state: Optional[str] = None) -> "Context":
        """Create a new root context with random ids."""
        return cls(
            trace_id=secrets.token_hex(16),
            parent_id=secrets.token_hex(8),
            flags=flags,
            state=state,
            remote=False,
        )

    @classmethod
    def nested_from(cls, parent: Optional["Context"], flags: int = 0) -> "Context":
        """Create a child of `parent`, or a new root context if there is none."""
        if parent is not None:
            return parent.nested(flags)
        return cls.local(flags)

    def nested(self, flags: Optional[int] = None) -> "Context":
        """Create a child context in the same trace with a new parent id."""
        return Context(
            trace_id=self.trace_id,
            parent_id=secrets.token_hex(8),
            flags=self.flags if flags is None else flags,
            state=self.state,
            remote=self.remote,
        )

    @property
    def sampled(self) -> bool:
        return (self.flags & SAMPLED) != 0

    def is_remote(self) -> bool:
        return bool(self.remote)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "trace_id": self.trace_id,
            "parent_id": self.parent_id,
            "flags": self.flags,
            "state": self.state,
            "remote": self.remote,
        }

    def to_traceparent(self) -> str:
        """
        Format the traceparent header value using OpenTelemetry's propagator.

        Returns an empty string for all-zero ids.

        Raises:
            ValidationError: if the ids are not hex of the right length
        """
        from traces_otel.context.propagators import to_span_context

        span = NonRecordingSpan(to_span_context(self))
        carrier: Dict[str, str] = {}
        _propagator.inject(carrier, context=trace_api.set_span_in_context(span))
        return carrier.get("traceparent", "")

    def __str__(self) -> str:
        return self.to_traceparent()
