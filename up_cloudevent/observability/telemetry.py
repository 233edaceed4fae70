"""
OpenTelemetry integration for uProtocol CloudEvents.

Serializers accept an optional ``CloudEventTelemetry`` and report a span and
counters per serialize/deserialize call. Only the OpenTelemetry API is used:
without a configured SDK every call is a no-op.
"""

import logging
from typing import Any, Dict, Optional

from opentelemetry import metrics, trace
from opentelemetry.context import Context, get_current
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

logger = logging.getLogger("up_cloudevent.observability.telemetry")

TRACEPARENT_HEADER = "traceparent"


class CloudEventTelemetry:
    """
    Traces and metrics for CloudEvent serialization.
    """

    def __init__(
        self,
        service_name: str = "up-cloudevent",
        tracer_provider: Optional[trace.TracerProvider] = None,
        meter_provider: Optional[metrics.MeterProvider] = None,
    ):
        """
        Initialize telemetry.

        Args:
            service_name: Name recorded on every span and metric
            tracer_provider: Tracer provider (default: the global provider)
            meter_provider: Meter provider (default: the global provider)
        """
        self.service_name = service_name
        self.tracer = trace.get_tracer("up_cloudevent", tracer_provider=tracer_provider)
        self.meter = metrics.get_meter("up_cloudevent", meter_provider=meter_provider)

        self.events_serialized = self.meter.create_counter(
            "cloudevent.serialized",
            description="CloudEvents serialized successfully",
        )
        self.events_deserialized = self.meter.create_counter(
            "cloudevent.deserialized",
            description="CloudEvents deserialized successfully",
        )
        self.events_rejected = self.meter.create_counter(
            "cloudevent.rejected",
            description="CloudEvents rejected on serialize or deserialize",
        )
        self.payload_bytes = self.meter.create_histogram(
            "cloudevent.payload_bytes",
            unit="By",
            description="Size of serialized CloudEvents",
        )

        logger.debug(f"Initialized CloudEvent telemetry for {service_name}")

    def create_span(
        self,
        name: str,
        context: Optional[Context] = None,
        kind: Optional[trace.SpanKind] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> trace.Span:
        """
        Create a new span for tracing.

        Args:
            name: Name of the span
            context: Parent context (optional)
            kind: Span kind (optional)
            attributes: Span attributes (optional)

        Returns:
            span: New span
        """
        all_attributes = {"service.name": self.service_name}
        if attributes:
            all_attributes.update(attributes)

        return self.tracer.start_span(
            name,
            context=context or get_current(),
            kind=kind or trace.SpanKind.INTERNAL,
            attributes=all_attributes,
        )

    def record_success(self, operation: str, serialization_format: str, size_bytes: int):
        """
        Record a successful serialize or deserialize.

        Args:
            operation: "serialize" or "deserialize"
            serialization_format: Serializer format name
            size_bytes: Size of the encoded CloudEvent
        """
        attributes = {"format": serialization_format}
        if operation == "serialize":
            self.events_serialized.add(1, attributes=attributes)
        else:
            self.events_deserialized.add(1, attributes=attributes)
        self.payload_bytes.record(size_bytes, attributes=attributes)

    def record_rejection(self, operation: str, serialization_format: str, reason: str):
        self.events_rejected.add(
            1,
            attributes={"format": serialization_format, "operation": operation, "reason": reason},
        )


def current_traceparent(context: Optional[Context] = None) -> Optional[str]:
    """
    Render the active span context as a W3C ``traceparent`` value.

    Args:
        context: Context to read (default: the current context)

    Returns:
        traceparent: Header value, or None when no valid span is active
    """
    carrier: Dict[str, str] = {}
    TraceContextTextMapPropagator().inject(carrier, context or get_current())
    return carrier.get(TRACEPARENT_HEADER)


def context_from_traceparent(traceparent: str) -> Context:
    """
    Build a parent context from a ``traceparent`` attribute value.

    Args:
        traceparent: W3C traceparent header value

    Returns:
        context: Context carrying the remote span (empty if unparsable)
    """
    return TraceContextTextMapPropagator().extract({TRACEPARENT_HEADER: traceparent})
