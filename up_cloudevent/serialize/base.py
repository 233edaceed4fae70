"""
Base serializer interface for uProtocol CloudEvents.

Every serializer validates on both paths: ``serialize`` refuses invalid
CloudEvents and ``deserialize`` never returns one.
"""

import abc
import logging
from typing import Optional

from opentelemetry import trace

from up_cloudevent.datamodel.envelope import CloudEvent
from up_cloudevent.errors import (
    CloudEventSerializationError,
    InvalidCloudEventError,
    MalformedInputError,
    ValidationFailedError,
)
from up_cloudevent.observability.telemetry import CloudEventTelemetry
from up_cloudevent.validate.validator import CloudEventValidator, default_validator

logger = logging.getLogger("up_cloudevent.serialize")


class CloudEventSerializer(abc.ABC):
    """
    Abstract base class for CloudEvent serializers.

    Subclasses implement ``_encode`` and ``_decode``, the pure byte
    transforms; this class sequences them with validation, logging and
    telemetry.
    """

    format_name: str = ""
    content_type: str = ""

    def __init__(
        self,
        validator: Optional[CloudEventValidator] = None,
        telemetry: Optional[CloudEventTelemetry] = None,
    ):
        """
        Initialize the serializer.

        Args:
            validator: Validator applied on both paths (default: uProtocol rules)
            telemetry: Telemetry provider for observability (optional)
        """
        self.validator = validator or default_validator
        self.telemetry = telemetry

    @abc.abstractmethod
    def _encode(self, cloud_event: CloudEvent) -> bytes:
        """Encode a CloudEvent already known to be valid."""

    @abc.abstractmethod
    def _decode(self, data: bytes) -> CloudEvent:
        """Parse non-empty bytes, raising MalformedInputError on bad input."""

    def serialize(self, cloud_event: CloudEvent) -> bytes:
        """
        Serialize a CloudEvent to bytes.

        Args:
            cloud_event: CloudEvent to serialize

        Returns:
            data: Serialized CloudEvent

        Raises:
            InvalidCloudEventError: If the CloudEvent does not pass validation
            UnsupportedAttributeEncodingError: If the format cannot represent it
        """
        span = self._start_span("cloudevent.serialize", trace.SpanKind.PRODUCER, cloud_event)
        try:
            result = self.validator.validate(cloud_event)
            if not result.valid:
                logger.error(f"Invalid input CloudEvent: {result.message}")
                raise InvalidCloudEventError(
                    f"Invalid input CloudEvent: {result.message}", result
                )

            data = self._encode(cloud_event)
            logger.debug(f"Serialized CloudEvent {cloud_event.id} ({len(data)} bytes, {self.format_name})")
            if self.telemetry:
                self.telemetry.record_success("serialize", self.format_name, len(data))
            return data
        except CloudEventSerializationError as e:
            self._record_failure(span, "serialize", e)
            raise
        finally:
            if span:
                span.end()

    def deserialize(self, data: bytes) -> CloudEvent:
        """
        Deserialize bytes to a CloudEvent.

        Args:
            data: Serialized CloudEvent

        Returns:
            cloud_event: Deserialized, valid CloudEvent

        Raises:
            MalformedInputError: If the bytes are empty or cannot be parsed
            UnsupportedAttributeEncodingError: If a value kind is not supported
            ValidationFailedError: If the parsed CloudEvent is not valid
        """
        span = self._start_span("cloudevent.deserialize", trace.SpanKind.CONSUMER)
        try:
            if not data:
                logger.error("Empty serialized data")
                raise MalformedInputError("Empty serialized data")

            cloud_event = self._decode(bytes(data))

            result = self.validator.validate(cloud_event)
            if not result.valid:
                logger.error(f"Invalid deserialized CloudEvent: {result.message}")
                raise ValidationFailedError(
                    f"Invalid deserialized CloudEvent: {result.message}", result
                )

            if span:
                span.set_attribute("cloudevent.id", cloud_event.id)
                span.set_attribute("cloudevent.type", cloud_event.type)
            if self.telemetry:
                self.telemetry.record_success("deserialize", self.format_name, len(data))
            return cloud_event
        except CloudEventSerializationError as e:
            self._record_failure(span, "deserialize", e)
            raise
        finally:
            if span:
                span.end()

    def _start_span(self, name, kind, cloud_event: Optional[CloudEvent] = None):
        if not self.telemetry:
            return None
        attributes = {"cloudevent.format": self.format_name}
        if cloud_event is not None:
            attributes["cloudevent.id"] = cloud_event.id
            attributes["cloudevent.type"] = cloud_event.type
        return self.telemetry.create_span(name, kind=kind, attributes=attributes)

    def _record_failure(self, span, operation: str, error: Exception):
        if span:
            span.record_exception(error)
            span.set_status(trace.Status(trace.StatusCode.ERROR, str(error)))
        if self.telemetry:
            self.telemetry.record_rejection(operation, self.format_name, type(error).__name__)
