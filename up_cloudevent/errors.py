"""
Error taxonomy for uProtocol CloudEvents.

Validation failures are reported as values (see ``ValidationError`` and
``up_cloudevent.validate.ValidationResult``). Serialization failures are
raised as ``CloudEventSerializationError`` subclasses so that a returned
buffer or envelope is always a successful result.
"""

from enum import Enum
from typing import Any, Optional


class ValidationError(Enum):
    """Reason a CloudEvent failed validation."""
    MISSING_MANDATORY_FIELD = "missing_mandatory_field"
    UNSUPPORTED_KIND = "unsupported_kind"
    UNSUPPORTED_SPEC_VERSION = "unsupported_spec_version"
    MISSING_ATTRIBUTE = "missing_attribute"
    ATTRIBUTE_TYPE_MISMATCH = "attribute_type_mismatch"


class CloudEventError(Exception):
    """Base class for all up_cloudevent errors."""


class TypeMismatchError(CloudEventError, TypeError):
    """An attribute value was read as a variant other than its active one."""


class CloudEventSerializationError(CloudEventError):
    """Base class for serialize/deserialize failures."""


class InvalidCloudEventError(CloudEventSerializationError):
    """The CloudEvent handed to ``serialize`` did not pass validation."""

    def __init__(self, message: str, result: Optional[Any] = None):
        super().__init__(message)
        self.result = result


class MalformedInputError(CloudEventSerializationError):
    """The input bytes could not be parsed into a CloudEvent."""


class UnsupportedAttributeEncodingError(CloudEventSerializationError):
    """A value cannot be represented in the serializer's encoding."""


class ValidationFailedError(CloudEventSerializationError):
    """The input parsed into a CloudEvent that did not pass validation."""

    def __init__(self, message: str, result: Optional[Any] = None):
        super().__init__(message)
        self.result = result
