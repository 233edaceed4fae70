"""
Protocol Buffers message for the CloudEvents protobuf format.

The ``io.cloudevents.v1.CloudEvent`` message is described here as a
FileDescriptorProto and registered in the default descriptor pool at import
time, the same way a generated ``_pb2`` module registers itself. This keeps
the package free of a protoc build step.
"""

import logging
from datetime import timezone

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory, timestamp_pb2
from google.protobuf.message import Message

from up_cloudevent.datamodel.attribute_value import (
    AttrCase,
    AttributeValue,
    CeBoolean,
    CeBytes,
    CeInteger,
    CeString,
    CeTimestamp,
    CeUnset,
    CeUri,
    CeUriRef,
)
from up_cloudevent.datamodel.envelope import CloudEvent
from up_cloudevent.errors import MalformedInputError

logger = logging.getLogger("up_cloudevent.serialize.cloudevents_proto")

PROTO_FILE_NAME = "up_cloudevent/cloudevents.proto"
PROTO_PACKAGE = "io.cloudevents.v1"
CLOUD_EVENT_TYPE_NAME = f"{PROTO_PACKAGE}.CloudEvent"

_Field = descriptor_pb2.FieldDescriptorProto


def _add_field(message_proto, name, number, field_type, label=_Field.LABEL_OPTIONAL,
               type_name=None, oneof_index=None):
    field = message_proto.field.add(name=name, number=number, type=field_type, label=label)
    if type_name is not None:
        field.type_name = type_name
    if oneof_index is not None:
        field.oneof_index = oneof_index
    return field


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """
    Describe ``cloudevents.proto`` (CloudEvents protobuf format, v1).

    Returns:
        file_proto: File descriptor for the CloudEvent message
    """
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=PROTO_FILE_NAME,
        package=PROTO_PACKAGE,
        syntax="proto3",
        dependency=[timestamp_pb2.DESCRIPTOR.name],
    )

    cloud_event = file_proto.message_type.add(name="CloudEvent")
    _add_field(cloud_event, "id", 1, _Field.TYPE_STRING)
    _add_field(cloud_event, "source", 2, _Field.TYPE_STRING)
    _add_field(cloud_event, "spec_version", 3, _Field.TYPE_STRING)
    _add_field(cloud_event, "type", 4, _Field.TYPE_STRING)
    _add_field(
        cloud_event, "attributes", 5, _Field.TYPE_MESSAGE,
        label=_Field.LABEL_REPEATED,
        type_name=f".{CLOUD_EVENT_TYPE_NAME}.AttributesEntry",
    )

    # oneof data
    cloud_event.oneof_decl.add(name="data")
    _add_field(cloud_event, "binary_data", 6, _Field.TYPE_BYTES, oneof_index=0)
    _add_field(cloud_event, "text_data", 7, _Field.TYPE_STRING, oneof_index=0)

    entry = cloud_event.nested_type.add(name="AttributesEntry")
    entry.options.map_entry = True
    _add_field(entry, "key", 1, _Field.TYPE_STRING)
    _add_field(
        entry, "value", 2, _Field.TYPE_MESSAGE,
        type_name=f".{CLOUD_EVENT_TYPE_NAME}.CloudEventAttributeValue",
    )

    value = cloud_event.nested_type.add(name="CloudEventAttributeValue")
    value.oneof_decl.add(name="attr")
    _add_field(value, "ce_boolean", 1, _Field.TYPE_BOOL, oneof_index=0)
    _add_field(value, "ce_integer", 2, _Field.TYPE_INT32, oneof_index=0)
    _add_field(value, "ce_string", 3, _Field.TYPE_STRING, oneof_index=0)
    _add_field(value, "ce_bytes", 4, _Field.TYPE_BYTES, oneof_index=0)
    _add_field(value, "ce_uri", 5, _Field.TYPE_STRING, oneof_index=0)
    _add_field(value, "ce_uri_ref", 6, _Field.TYPE_STRING, oneof_index=0)
    _add_field(
        value, "ce_timestamp", 7, _Field.TYPE_MESSAGE,
        type_name=".google.protobuf.Timestamp", oneof_index=0,
    )

    return file_proto


def _register():
    pool = descriptor_pool.Default()
    try:
        pool.FindFileByName(PROTO_FILE_NAME)
    except KeyError:
        pool.AddSerializedFile(build_file_descriptor().SerializeToString())
        logger.debug(f"Registered {PROTO_FILE_NAME} in the default descriptor pool")

    descriptor = pool.FindMessageTypeByName(CLOUD_EVENT_TYPE_NAME)
    value_descriptor = descriptor.nested_types_by_name["CloudEventAttributeValue"]
    return (
        message_factory.GetMessageClass(descriptor),
        message_factory.GetMessageClass(value_descriptor),
    )


CloudEventProto, CloudEventAttributeValueProto = _register()

_SCALAR_VARIANTS = {
    AttrCase.BOOLEAN: CeBoolean,
    AttrCase.INTEGER: CeInteger,
    AttrCase.STRING: CeString,
    AttrCase.BYTES: CeBytes,
    AttrCase.URI: CeUri,
    AttrCase.URI_REF: CeUriRef,
}


def to_message(cloud_event: CloudEvent) -> Message:
    """
    Convert a CloudEvent envelope into its protobuf message.

    Args:
        cloud_event: CloudEvent to convert

    Returns:
        message: ``io.cloudevents.v1.CloudEvent`` message
    """
    message = CloudEventProto(
        id=cloud_event.id,
        source=cloud_event.source,
        spec_version=cloud_event.spec_version,
        type=cloud_event.type,
    )

    if isinstance(cloud_event.data, str):
        message.text_data = cloud_event.data
    elif isinstance(cloud_event.data, bytes):
        message.binary_data = cloud_event.data

    for name, value in cloud_event.attributes.items():
        # Indexing a message map inserts the entry, which is all an unset value needs.
        entry = message.attributes[name]
        if value.case is AttrCase.TIMESTAMP:
            entry.ce_timestamp.FromDatetime(value.payload)
        elif value.case is not AttrCase.ATTR_NOT_SET:
            setattr(entry, value.case.value, value.payload)

    return message


def _attribute_from_message(name: str, entry: Message) -> AttributeValue:
    case = AttrCase.from_field_name(entry.WhichOneof("attr"))
    if case is AttrCase.ATTR_NOT_SET:
        return CeUnset()
    if case is AttrCase.TIMESTAMP:
        try:
            return CeTimestamp(entry.ce_timestamp.ToDatetime(tzinfo=timezone.utc))
        except (ValueError, OverflowError) as e:
            raise MalformedInputError(f"Attribute {name} has an invalid timestamp: {e}") from e
    return _SCALAR_VARIANTS[case](getattr(entry, case.value))


def from_message(message: Message) -> CloudEvent:
    """
    Convert a protobuf message into a CloudEvent envelope.

    Args:
        message: ``io.cloudevents.v1.CloudEvent`` message

    Returns:
        cloud_event: Equivalent CloudEvent envelope
    """
    data_field = message.WhichOneof("data")
    data = getattr(message, data_field) if data_field else None

    attributes = {
        name: _attribute_from_message(name, entry)
        for name, entry in message.attributes.items()
    }

    return CloudEvent(
        id=message.id,
        source=message.source,
        spec_version=message.spec_version,
        type=message.type,
        data=data,
        attributes=attributes,
    )
