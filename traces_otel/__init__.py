"""OpenTelemetry backend for a generic tracing interface.

The functions in this module delegate to a process-wide default
`OpenTelemetryBackend`, which uses the global OpenTelemetry tracer provider
and propagator unless `configure()` or `set_backend()` says otherwise.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, MutableMapping, Optional, TypeVar

from opentelemetry.context import Context as OTelContext
from opentelemetry.trace import Span as OTelSpan

from traces_otel.config import TracesConfig
from traces_otel.context.context import SAMPLED, Context
from traces_otel.errors import ConfigError, TracesError, ValidationError
from traces_otel.instrumentation.decorator import traced
from traces_otel.tracer.backend import OpenTelemetryBackend
from traces_otel.tracer.provider import install_tracer_provider
from traces_otel.version import __version__

T = TypeVar("T")

logger = logging.getLogger(__name__)

_backend_lock = threading.Lock()
_backend = OpenTelemetryBackend()


def get_backend() -> OpenTelemetryBackend:
    return _backend


def set_backend(backend: OpenTelemetryBackend) -> OpenTelemetryBackend:
    """Replace the default backend. Returns the previous one."""
    global _backend
    with _backend_lock:
        previous, _backend = _backend, backend
    return previous


def configure(config: Optional[TracesConfig] = None) -> OpenTelemetryBackend:
    """
    Apply configuration and rebuild the default backend.

    Args:
        config: Configuration (read from the environment if omitted)

    Returns:
        The new default backend

    Raises:
        ConfigError: if the environment holds invalid values
    """
    if config is None:
        config = TracesConfig.from_env()

    # NOTSET hands the level back to the parent loggers.
    logger.setLevel(logging.DEBUG if config.debug else logging.NOTSET)

    provider = install_tracer_provider(config) if config.install_sdk else None

    backend = OpenTelemetryBackend(tracer_provider=provider)
    set_backend(backend)
    logger.debug("Configured %s backend", config.backend)
    return backend


def trace(name: str, body: Callable[..., T], attributes: Optional[Mapping[Any, Any]] = None) -> T:
    return _backend.trace(name, body, attributes)


def trace_span(name: str, attributes: Optional[Mapping[Any, Any]] = None):
    return _backend.trace_span(name, attributes)


def trace_context(span: Optional[OTelSpan] = None) -> Optional[Context]:
    return _backend.trace_context(span)


def set_trace_context(context: Optional[Context]) -> Optional[object]:
    return _backend.set_trace_context(context)


def is_active() -> bool:
    return _backend.is_active()


def current_context() -> OTelContext:
    return _backend.current_context()


def with_context(context: OTelContext, body: Optional[Callable[[], T]] = None):
    return _backend.with_context(context, body)


def use_context(context: OTelContext):
    return _backend.use_context(context)


def detach(token: object) -> None:
    _backend.detach(token)


def inject(
    headers: Optional[MutableMapping[str, str]] = None,
    context: Optional[OTelContext] = None,
) -> Optional[MutableMapping[str, str]]:
    return _backend.inject(headers, context)


def extract(headers: Mapping[str, Any]) -> OTelContext:
    return _backend.extract(headers)


__all__ = [
    "__version__",
    "SAMPLED",
    "Context",
    "OpenTelemetryBackend",
    "TracesConfig",
    "TracesError",
    "ConfigError",
    "ValidationError",
    "configure",
    "get_backend",
    "set_backend",
    "traced",
    "trace",
    "trace_span",
    "trace_context",
    "set_trace_context",
    "is_active",
    "current_context",
    "with_context",
    "use_context",
    "detach",
    "inject",
    "extract",
]
