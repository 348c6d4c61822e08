"""Call-site instrumentation helpers."""

from traces_otel.instrumentation.decorator import traced

__all__ = [
    "traced",
]
