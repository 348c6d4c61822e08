"""Tracer components for traces_otel."""

from traces_otel.tracer.backend import OpenTelemetryBackend
from traces_otel.tracer.provider import create_tracer_provider, install_tracer_provider

__all__ = [
    "OpenTelemetryBackend",
    "create_tracer_provider",
    "install_tracer_provider",
]
