"""Tests for the @traced decorator."""

import asyncio

import pytest

from opentelemetry.trace import StatusCode

from traces_otel import traced


class Service:

    def __init__(self):
        self.calls = []

    @traced(attributes={"component": "service"})
    def my_method(self, argument):
        self.calls.append(argument)
        return argument * 2


def test_sync_function(backend, exporter):
    @traced("add_numbers", backend=backend)
    def add(a, b):
        return a + b

    assert add(5, 3) == 8
    assert exporter.get_finished_spans()[0].name == "add_numbers"


def test_name_defaults_to_qualname(backend, exporter):
    @traced(backend=backend)
    def process():
        return "ok"

    process()

    assert exporter.get_finished_spans()[0].name.endswith("test_name_defaults_to_qualname.<locals>.process")


def test_preserves_metadata(backend):
    @traced(backend=backend)
    def documented():
        """Docstring."""

    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docstring."


def test_uses_default_backend(default_backend, exporter):
    service = Service()

    assert service.my_method(10) == 20

    span = exporter.get_finished_spans()[0]
    assert span.name == "Service.my_method"
    assert span.attributes["component"] == "service"


def test_exception_propagates(backend, exporter):
    @traced("failing", backend=backend)
    def failing():
        raise ValueError("bad input")

    with pytest.raises(ValueError, match="bad input"):
        failing()

    span = exporter.get_finished_spans()[0]
    assert span.status.status_code == StatusCode.ERROR


def test_async_function(backend, exporter):
    @traced("fetch", backend=backend)
    async def fetch(value):
        await asyncio.sleep(0)
        assert backend.is_active()
        return value

    assert asyncio.run(fetch("data")) == "data"
    assert exporter.get_finished_spans()[0].name == "fetch"


def test_async_exception_propagates(backend, exporter):
    @traced("fetch", backend=backend)
    async def fetch():
        raise RuntimeError("unavailable")

    with pytest.raises(RuntimeError):
        asyncio.run(fetch())

    assert exporter.get_finished_spans()[0].status.status_code == StatusCode.ERROR
