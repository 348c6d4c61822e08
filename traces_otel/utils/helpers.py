"""Helper functions for converting between hex ids and OpenTelemetry ints."""

from __future__ import annotations

import inspect
from typing import Any, Callable

from traces_otel.errors import ValidationError


def format_trace_id(trace_id: int) -> str:
    """
    Format OTel trace_id (int128) to hex string.

    Args:
        trace_id: OTel trace_id as int

    Returns:
        32-character hex string
    """
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """
    Format OTel span_id (int64) to hex string.

    Args:
        span_id: OTel span_id as int

    Returns:
        16-character hex string
    """
    return format(span_id, '016x')


def _parse_hex(hex_string: str, length: int, kind: str) -> int:
    if not hex_string or len(hex_string) != length:
        raise ValidationError(
            f"Invalid {kind}: expected {length} hex characters",
            {kind: hex_string},
        )
    try:
        return int(hex_string, 16)
    except ValueError as error:
        raise ValidationError(f"Invalid {kind}: not hexadecimal", {kind: hex_string}) from error


def parse_trace_id(hex_string: str) -> int:
    """
    Parse hex string trace_id to OTel int.

    Raises:
        ValidationError: if the value is not 32 hex characters
    """
    return _parse_hex(hex_string, 32, "trace_id")


def parse_span_id(hex_string: str) -> int:
    """
    Parse hex string span_id to OTel int.

    Raises:
        ValidationError: if the value is not 16 hex characters
    """
    return _parse_hex(hex_string, 16, "span_id")


def accepts_argument(body: Callable[..., Any]) -> bool:
    """Return True if ``body`` can be called with one positional argument."""
    try:
        signature = inspect.signature(body)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures get called bare.
        return False

    for parameter in signature.parameters.values():
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        ):
            return True
    return False
