"""TracerProvider setup using the OpenTelemetry SDK."""

from __future__ import annotations

import logging
from typing import Optional

from opentelemetry import trace as trace_api
from opentelemetry.sdk.resources import Resource as OTelResource
from opentelemetry.sdk.trace import TracerProvider as OTelTracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

from traces_otel.config import TracesConfig

logger = logging.getLogger(__name__)


def create_tracer_provider(config: TracesConfig) -> OTelTracerProvider:
    """
    Build an SDK TracerProvider for `config`.

    Args:
        config: Backend configuration (service name, console exporter)

    Returns:
        A new OpenTelemetry SDK TracerProvider, not installed globally
    """
    otel_resource = OTelResource.create({"service.name": config.service_name})
    provider = OTelTracerProvider(resource=otel_resource)

    if config.console_exporter:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    return provider


def has_sdk_provider() -> bool:
    """Whether the global provider is already an SDK TracerProvider."""
    return isinstance(trace_api.get_tracer_provider(), OTelTracerProvider)


def install_tracer_provider(config: TracesConfig) -> Optional[OTelTracerProvider]:
    """
    Install an SDK TracerProvider as the global provider.

    Returns the installed provider, or None if an SDK provider was already set.
    """
    if has_sdk_provider():
        logger.debug("SDK TracerProvider already installed; leaving it in place")
        if config.console_exporter:
            logger.debug("Console exporter not added: the existing SDK TracerProvider is left unchanged")
        return None

    provider = create_tracer_provider(config)
    trace_api.set_tracer_provider(provider)
    logger.info("Installed OpenTelemetry SDK TracerProvider for service %s", config.service_name)
    return provider
