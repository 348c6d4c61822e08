"""Backend mapping the generic tracing interface onto OpenTelemetry."""

from __future__ import annotations

import inspect
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Mapping, MutableMapping, Optional, TypeVar

from opentelemetry import context as context_api
from opentelemetry import trace as trace_api
from opentelemetry.context import Context as OTelContext
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace import NonRecordingSpan, Span as OTelSpan, Status, StatusCode

from traces_otel.context import propagators
from traces_otel.context.context import Context
from traces_otel.utils.helpers import accepts_argument
from traces_otel.version import __version__

T = TypeVar("T")


def _stringify_keys(attributes: Optional[Mapping[Any, Any]]) -> Optional[Dict[str, Any]]:
    if attributes is None:
        return None
    return {str(key): value for key, value in attributes.items()}


class OpenTelemetryBackend:
    """
    Tracing backend that writes spans to OpenTelemetry.

    All span and context state lives in OpenTelemetry's context (backed by
    contextvars), so one backend can be shared across threads and tasks.
    """

    def __init__(
        self,
        tracer_provider: Optional[trace_api.TracerProvider] = None,
        propagator: Optional[TextMapPropagator] = None,
        instrumentation_name: str = "traces_otel",
    ) -> None:
        """
        Initialize the backend.

        Args:
            tracer_provider: Provider to obtain the tracer from (global provider if omitted)
            propagator: Text map propagator (global textmap, resolved per call, if omitted)
            instrumentation_name: Instrumentation scope name for the tracer
        """
        self._propagator = propagator
        self.tracer = trace_api.get_tracer(
            instrumentation_name,
            __version__,
            tracer_provider=tracer_provider,
        )

    # Spans

    @contextmanager
    def trace_span(self, name: str, attributes: Optional[Mapping[Any, Any]] = None) -> Iterator[OTelSpan]:
        """
        Start a span, make it current and end it when the block exits.

        Any exception escaping the block is recorded on the span, which is
        marked as errored, and then re-raised unchanged.
        """
        span = self.tracer.start_span(name, attributes=_stringify_keys(attributes))

        try:
            with trace_api.use_span(
                span,
                end_on_exit=False,
                record_exception=False,
                set_status_on_exception=False,
            ):
                yield span
        except BaseException as error:
            span.record_exception(error)
            span.set_status(
                Status(StatusCode.ERROR, f"Unhandled exception of type: {type(error).__name__}")
            )
            raise
        finally:
            span.end()

    def trace(
        self,
        name: str,
        body: Callable[..., T],
        attributes: Optional[Mapping[Any, Any]] = None,
    ) -> T:
        """
        Run `body` inside a new span named `name` and return its result.

        `body` receives the span if it declares a positional parameter.
        Coroutine functions are rejected; use `trace_span` inside the
        coroutine or the `@traced` decorator instead.

        Raises:
            TypeError: if `body` is a coroutine function
        """
        if inspect.iscoroutinefunction(body):
            raise TypeError(
                f"trace() cannot run coroutine function {body!r}; use trace_span() or @traced"
            )

        with self.trace_span(name, attributes) as span:
            if accepts_argument(body):
                return body(span)
            return body()

    # Trace context

    def trace_context(self, span: Optional[OTelSpan] = None) -> Optional[Context]:
        """Return the generic Context of `span` (default: current span), or None if invalid."""
        if span is None:
            span = trace_api.get_current_span()

        span_context = span.get_span_context()
        if not span_context.is_valid:
            return None

        return propagators.from_span_context(span_context, trace_api.set_span_in_context(span))

    def set_trace_context(self, context: Optional[Context]) -> Optional[object]:
        """
        Make `context` the parent of spans subsequently started on this execution path.

        No span is started. Returns the token needed to restore the previous
        context, or None when `context` is None.

        Raises:
            ValidationError: if the context ids are malformed
        """
        if context is None:
            return None

        span = NonRecordingSpan(propagators.to_span_context(context))
        return context_api.attach(trace_api.set_span_in_context(span))

    def is_active(self) -> bool:
        """Whether a valid span is current on this execution path."""
        return trace_api.get_current_span().get_span_context().is_valid

    # Native context

    def current_context(self) -> OTelContext:
        return context_api.get_current()

    def with_context(self, context: OTelContext, body: Optional[Callable[[], T]] = None):
        """
        Activate `context`.

        With `body`, the context is active only while `body` runs and its
        result is returned. Without, the context stays active and the caller
        must pass the returned token to `detach`.
        """
        if body is None:
            return context_api.attach(context)

        with self.use_context(context):
            return body()

    @contextmanager
    def use_context(self, context: OTelContext) -> Iterator[OTelContext]:
        token = context_api.attach(context)
        try:
            yield context
        finally:
            context_api.detach(token)

    def detach(self, token: object) -> None:
        context_api.detach(token)

    # Propagation

    def inject(
        self,
        headers: Optional[MutableMapping[str, str]] = None,
        context: Optional[OTelContext] = None,
    ) -> Optional[MutableMapping[str, str]]:
        """
        Write the given (or current) context into `headers`.

        Returns the headers, or None if there was nothing to propagate.
        """
        return propagators.inject(headers, context, self._propagator)

    def extract(self, headers: Mapping[str, Any]) -> OTelContext:
        """Return the context carried by `headers`, or the current context if there is none."""
        return propagators.extract(headers, propagator=self._propagator)
