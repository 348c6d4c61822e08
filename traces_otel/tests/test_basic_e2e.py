"""Basic smoke tests for traces_otel.

Quick sanity checks that the package-level interface works. Detailed
behaviour is covered by test_backend.py and test_propagation.py.
"""

import re

import pytest

import traces_otel
from traces_otel import Context, traced


def test_version_exposed():
    """Smoke test: version is accessible."""
    assert isinstance(traces_otel.__version__, str)
    assert len(traces_otel.__version__) > 0


def test_default_backend_without_sdk_provider():
    """Smoke test: with no SDK provider installed, tracing is a silent no-op."""
    assert traces_otel.trace("noop", lambda: "ok") == "ok"


def test_package_functions_delegate(default_backend, exporter):
    def body(span):
        assert traces_otel.is_active()
        return traces_otel.trace_context(), traces_otel.inject()

    context, headers = traces_otel.trace("request", body, attributes={"argument": 10})

    assert re.match(r"^00-[0-9a-f]{32}-[0-9a-f]{16}-01$", headers["traceparent"])
    assert headers["traceparent"] == str(context)
    assert exporter.get_finished_spans()[0].attributes["argument"] == 10
    assert traces_otel.trace_context() is None
    assert traces_otel.inject() is None


def test_propagate_between_services(default_backend, exporter):
    """Client injects, server extracts and continues the same trace."""

    @traced("client")
    def client():
        return traces_otel.inject({})

    @traced("server")
    def server():
        return traces_otel.trace_context()

    headers = client()
    received = traces_otel.with_context(traces_otel.extract(headers), server)

    client_span, server_span = exporter.get_finished_spans()
    assert server_span.parent.span_id == client_span.context.span_id
    assert received.trace_id == Context.parse(headers["traceparent"]).trace_id


def test_set_trace_context_and_detach(default_backend, exporter):
    context = Context.local(traces_otel.SAMPLED)

    token = traces_otel.set_trace_context(context)
    try:
        with traces_otel.trace_span("child"):
            pass
    finally:
        traces_otel.detach(token)

    span = exporter.get_finished_spans()[0]
    assert span.parent.span_id == int(context.parent_id, 16)
    assert not traces_otel.is_active()


def test_use_context_restores(default_backend):
    original = traces_otel.current_context()
    target = traces_otel.trace("span", lambda: traces_otel.current_context())

    with traces_otel.use_context(target):
        assert traces_otel.current_context() is target

    assert traces_otel.current_context() is original


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
