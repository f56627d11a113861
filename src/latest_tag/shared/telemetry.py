"""
OpenTelemetry instrumentation utilities for tracing remote calls
"""

import functools
import os
import time
from collections.abc import Callable
from contextlib import contextmanager
from typing import Any

from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Status, StatusCode


class TelemetryManager:
    """Manages OpenTelemetry setup and instrumentation"""

    def __init__(
        self,
        service_name: str = "latest-tag-indicator",
        console_export: bool | None = None,
    ):
        """
        Initialize telemetry manager.

        Args:
            service_name: Name of the service for telemetry identification
            console_export: Print finished spans to stdout (defaults to
                LATEST_TAG_TRACE_CONSOLE)
        """
        self.service_name = service_name
        if console_export is None:
            console_export = (
                os.getenv("LATEST_TAG_TRACE_CONSOLE", "false").lower() == "true"
            )
        self.provider = TracerProvider(
            resource=Resource.create({"service.name": self.service_name})
        )
        if console_export:
            self.provider.add_span_processor(
                SimpleSpanProcessor(ConsoleSpanExporter())
            )
        # Spans stay on this provider; the global tracer provider is untouched
        self.tracer = self.provider.get_tracer(__name__)

    @contextmanager
    def trace_operation(
        self, operation_name: str, attributes: dict[str, Any] | None = None
    ):
        """
        Context manager for tracing operations.

        Args:
            operation_name: Name of the operation being traced
            attributes: Additional attributes to add to the span

        Yields:
            The current span
        """
        with self.tracer.start_as_current_span(
            operation_name, record_exception=False, set_status_on_exception=False
        ) as span:
            if attributes:
                for key, value in attributes.items():
                    span.set_attribute(key, str(value))

            try:
                yield span
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise

    def trace_function(self, operation_name: str | None = None):
        """
        Decorator for tracing function calls.

        Args:
            operation_name: Custom operation name (defaults to function name)

        Returns:
            Decorated function
        """

        def decorator(func: Callable) -> Callable:
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                name = operation_name or f"{func.__module__}.{func.__name__}"

                with self.trace_operation(name) as span:
                    start_time = time.time()
                    result = func(*args, **kwargs)
                    span.set_attribute("duration_seconds", time.time() - start_time)
                    return result

            return wrapper

        return decorator

    def shutdown(self) -> None:
        """Flush and stop span processors."""
        self.provider.shutdown()


# Global telemetry manager instance
_telemetry_manager: TelemetryManager | None = None


def get_telemetry_manager() -> TelemetryManager:
    """Get or create the global telemetry manager instance"""
    global _telemetry_manager
    if _telemetry_manager is None:
        _telemetry_manager = TelemetryManager()
    return _telemetry_manager


def trace_operation(operation_name: str, attributes: dict[str, Any] | None = None):
    """
    Convenience function for tracing operations.

    Args:
        operation_name: Name of the operation
        attributes: Additional attributes
    """
    return get_telemetry_manager().trace_operation(operation_name, attributes)


def trace_function(operation_name: str | None = None):
    """
    Convenience decorator for tracing functions.

    The manager is looked up at call time so tests and hosts can swap it.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            traced = get_telemetry_manager().trace_function(operation_name)(func)
            return traced(*args, **kwargs)

        return wrapper

    return decorator
