"""@traced decorator for instrumenting functions at the call site."""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Dict, Optional


def traced(
    name: Optional[str] = None,
    *,
    attributes: Optional[Dict[Any, Any]] = None,
    backend: Optional[Any] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorate a function so each call runs inside a span.

    - Supports sync and async functions.
    - The span name defaults to the function's qualified name.
    - Exceptions are recorded on the span and propagate unchanged.
    - `backend` defaults to the package-level backend, resolved per call.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        span_name = name or func.__qualname__
        span_attrs = dict(attributes) if attributes else None

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                with _get_backend(backend).trace_span(span_name, span_attrs):
                    return await func(*args, **kwargs)

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            with _get_backend(backend).trace_span(span_name, span_attrs):
                return func(*args, **kwargs)

        return sync_wrapper

    return decorator


def _get_backend(backend):
    if backend is not None:
        return backend

    import traces_otel

    return traces_otel.get_backend()
