"""
up-cloudevent: uProtocol CloudEvent validation and serialization.

This package provides the CloudEvent envelope used to carry uProtocol
messages, its validation rules and its serializers:
- Data model: typed attribute values, the envelope, common attributes
- Validation: mandatory header fields and per-kind mandatory attributes
- Serialization: CloudEvents protobuf format and flat JSON
- Observability: OpenTelemetry spans and metrics (optional)
"""

__version__ = "0.1.0"

# Data model
from up_cloudevent.datamodel import (
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
    CloudEvent,
    SpecVersion,
    UCloudEventAttributes,
    UMessageType,
    UPriority,
)

# Errors
from up_cloudevent.errors import (
    CloudEventError,
    CloudEventSerializationError,
    InvalidCloudEventError,
    MalformedInputError,
    TypeMismatchError,
    UnsupportedAttributeEncodingError,
    ValidationError,
    ValidationFailedError,
)

# Validation
from up_cloudevent.validate import CloudEventValidator, ValidationResult, is_valid_event

# Serialization
from up_cloudevent.serialize import CloudEventSerializer, JsonSerializer, ProtobufSerializer, get_serializer

# Configuration
from up_cloudevent.core import CloudEventConfig
