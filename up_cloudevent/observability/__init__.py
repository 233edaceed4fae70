"""
Observability for uProtocol CloudEvents.

This package provides OpenTelemetry tracing and metrics around CloudEvent
serialization and W3C traceparent helpers.
"""

from up_cloudevent.observability.telemetry import (
    CloudEventTelemetry,
    context_from_traceparent,
    current_traceparent,
)

__all__ = ["CloudEventTelemetry", "context_from_traceparent", "current_traceparent"]
