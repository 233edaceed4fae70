"""
Protocol Buffers serialization for uProtocol CloudEvents.

The byte layout is entirely that of the CloudEvents protobuf format; this
module only sequences validation around the protobuf library and turns its
parse failures into ``MalformedInputError``.
"""

import logging

from google.protobuf.message import DecodeError

from up_cloudevent.datamodel.envelope import CloudEvent
from up_cloudevent.errors import MalformedInputError, UnsupportedAttributeEncodingError
from up_cloudevent.serialize.base import CloudEventSerializer
from up_cloudevent.serialize.cloudevents_proto import CloudEventProto, from_message, to_message
from up_cloudevent.validate.validator import PROTO_CONTENT_TYPE

logger = logging.getLogger("up_cloudevent.serialize.protobuf")


class ProtobufSerializer(CloudEventSerializer):
    """
    Serializer for the binary CloudEvents protobuf format.
    """

    format_name = "protobuf"
    content_type = PROTO_CONTENT_TYPE

    def _encode(self, cloud_event: CloudEvent) -> bytes:
        try:
            return to_message(cloud_event).SerializeToString()
        except (UnicodeEncodeError, ValueError) as e:
            # protobuf string fields only accept text that encodes as UTF-8
            logger.error(f"Failed to encode CloudEvent {cloud_event.id!r}: {e}")
            raise UnsupportedAttributeEncodingError(f"Failed to encode CloudEvent: {e}") from e

    def _decode(self, data: bytes) -> CloudEvent:
        message = CloudEventProto()
        try:
            message.ParseFromString(data)
        except DecodeError as e:
            logger.error(f"Failed to parse CloudEvent: {e}")
            raise MalformedInputError(f"Failed to parse CloudEvent: {e}") from e

        return from_message(message)
