"""traces_otel error hierarchy and exceptions."""

from __future__ import annotations


class TracesError(Exception):
    """Base exception for all traces_otel errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(TracesError):
    """Raised when configuration is invalid or conflicting."""
    pass


class ValidationError(TracesError):
    """Raised when an explicitly supplied trace context is malformed."""
    pass
