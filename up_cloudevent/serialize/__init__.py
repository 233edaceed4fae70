"""
Serialization for uProtocol CloudEvents.

This package provides the serializer interface and its two formats: the
binary CloudEvents protobuf format and a flat JSON format.
"""

from up_cloudevent.serialize.base import CloudEventSerializer
from up_cloudevent.serialize.factory import get_serializer
from up_cloudevent.serialize.json import JsonSerializer
from up_cloudevent.serialize.protobuf import ProtobufSerializer

__all__ = ["CloudEventSerializer", "JsonSerializer", "ProtobufSerializer", "get_serializer"]
