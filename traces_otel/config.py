"""Configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from traces_otel.errors import ConfigError

BACKEND_NAME = "opentelemetry"

# Names the surrounding framework may use to select this backend.
_BACKEND_ALIASES = {
    "opentelemetry": BACKEND_NAME,
    "open_telemetry": BACKEND_NAME,
    "traces/backend/open_telemetry": BACKEND_NAME,
    "traces_otel": BACKEND_NAME,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def normalize_backend(name: str) -> str:
    """
    Map a backend selector to its canonical name.

    Raises:
        ConfigError: if the selector does not name this backend
    """
    key = name.strip().lower()
    if key not in _BACKEND_ALIASES:
        raise ConfigError(
            "Unsupported tracing backend",
            {"backend": name, "supported": "|".join(sorted(_BACKEND_ALIASES))},
        )
    return _BACKEND_ALIASES[key]


def parse_bool(name: str, value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ConfigError("Invalid boolean value", {name: value})


@dataclass(frozen=True)
class TracesConfig:
    """
    Configuration for the OpenTelemetry backend.

    Attributes:
        backend: Canonical backend name selected by TRACES_BACKEND.
        service_name: service.name resource attribute for an SDK provider.
        install_sdk: Install an SDK TracerProvider globally on configure().
        console_exporter: Print finished spans to stdout (SDK provider only).
        debug: Log at DEBUG level.
    """

    backend: str = BACKEND_NAME
    service_name: str = "traces-otel"
    install_sdk: bool = False
    console_exporter: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "backend", normalize_backend(self.backend))
        if not self.service_name:
            raise ConfigError("service_name must not be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TracesConfig":
        """Create configuration from environment variables."""
        env = os.environ if environ is None else environ

        return cls(
            backend=env.get("TRACES_BACKEND", BACKEND_NAME),
            service_name=env.get("OTEL_SERVICE_NAME", "traces-otel"),
            install_sdk=parse_bool("TRACES_OTEL_SDK", env.get("TRACES_OTEL_SDK")),
            console_exporter=parse_bool("TRACES_OTEL_CONSOLE", env.get("TRACES_OTEL_CONSOLE")),
            debug=parse_bool("TRACES_DEBUG", env.get("TRACES_DEBUG")),
        )
