"""Version of the traces_otel package."""

__version__ = "0.4.0"
