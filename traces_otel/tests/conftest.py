"""Shared fixtures: an SDK provider recording spans in memory."""

import pytest

from opentelemetry import context as context_api
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

import traces_otel
from traces_otel import OpenTelemetryBackend


@pytest.fixture
def exporter():
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def backend(tracer_provider):
    return OpenTelemetryBackend(tracer_provider=tracer_provider)


@pytest.fixture
def default_backend(backend):
    """Install `backend` as the package-level backend for the test."""
    previous = traces_otel.set_backend(backend)
    yield backend
    traces_otel.set_backend(previous)


@pytest.fixture(autouse=True)
def empty_context():
    """Run every test from an empty OpenTelemetry context."""
    token = context_api.attach(context_api.Context())
    yield
    context_api.detach(token)
