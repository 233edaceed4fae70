"""
Selection of a CloudEvent serializer by format name.
"""

from typing import Optional

from up_cloudevent.observability.telemetry import CloudEventTelemetry
from up_cloudevent.serialize.base import CloudEventSerializer
from up_cloudevent.serialize.json import JsonSerializer
from up_cloudevent.serialize.protobuf import ProtobufSerializer
from up_cloudevent.validate.validator import CloudEventValidator

SERIALIZERS = {
    ProtobufSerializer.format_name: ProtobufSerializer,
    JsonSerializer.format_name: JsonSerializer,
}


def get_serializer(
    serialization_format: str = "protobuf",
    validator: Optional[CloudEventValidator] = None,
    telemetry: Optional[CloudEventTelemetry] = None,
) -> CloudEventSerializer:
    """
    Create a serializer for a format.

    Args:
        serialization_format: "protobuf" or "json"
        validator: Validator the serializer applies (optional)
        telemetry: Telemetry provider (optional)

    Returns:
        serializer: Serializer instance
    """
    serializer_class = SERIALIZERS.get(serialization_format.lower())
    if serializer_class is None:
        raise ValueError(f"Unknown serialization format: {serialization_format}")
    return serializer_class(validator=validator, telemetry=telemetry)
