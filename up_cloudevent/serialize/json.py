"""
JSON serialization for uProtocol CloudEvents.

The JSON form is a flat object: the header fields ``id``, ``source``,
``specversion`` and ``type``, the text payload under ``data``, and every
other key an attribute. Attributes are limited to JSON strings (String
variant) and integral numbers (Integer variant).
"""

import json
import logging
from typing import Any, Dict

from up_cloudevent.datamodel.attribute_value import (
    INT32_MAX,
    INT32_MIN,
    AttrCase,
    AttributeValue,
    CeInteger,
    CeString,
)
from up_cloudevent.datamodel.envelope import CloudEvent
from up_cloudevent.errors import MalformedInputError, UnsupportedAttributeEncodingError
from up_cloudevent.serialize.base import CloudEventSerializer
from up_cloudevent.validate.validator import JSON_CONTENT_TYPE

logger = logging.getLogger("up_cloudevent.serialize.json")

# JSON key -> CloudEvent field
HEADER_FIELDS = {
    "id": "id",
    "source": "source",
    "specversion": "spec_version",
    "type": "type",
    "data": "data",
}


def json_type_name(value: Any) -> str:
    """Name a decoded JSON value's kind for diagnostics."""
    if value is None:
        return "Null"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, str):
        return "String"
    if isinstance(value, (int, float)):
        return "Number"
    if isinstance(value, list):
        return "Array"
    if isinstance(value, dict):
        return "Object"
    return "Not defined"


def _decode_attribute(name: str, value: Any) -> AttributeValue:
    if isinstance(value, str):
        return CeString(value)
    if isinstance(value, int) and not isinstance(value, bool):
        if not INT32_MIN <= value <= INT32_MAX:
            raise UnsupportedAttributeEncodingError(
                f"Attribute {name} is out of int32 range: {value}"
            )
        return CeInteger(value)
    raise UnsupportedAttributeEncodingError(
        f"Unsupported json type {json_type_name(value)} for attribute {name}"
    )


class JsonSerializer(CloudEventSerializer):
    """
    Serializer for the flat JSON CloudEvent format.
    """

    format_name = "json"
    content_type = JSON_CONTENT_TYPE

    def __init__(self, *args, indent=None, **kwargs):
        """
        Initialize the JSON serializer.

        Args:
            indent: Indentation passed to ``json.dumps`` (default: compact)
        """
        super().__init__(*args, **kwargs)
        self.indent = indent

    def _encode(self, cloud_event: CloudEvent) -> bytes:
        document: Dict[str, Any] = {
            "id": cloud_event.id,
            "source": cloud_event.source,
            "specversion": cloud_event.spec_version,
            "type": cloud_event.type,
        }

        if isinstance(cloud_event.data, bytes):
            raise UnsupportedAttributeEncodingError(
                "Binary data cannot be represented in JSON CloudEvents"
            )
        if cloud_event.data is not None:
            document["data"] = cloud_event.data

        for name, value in cloud_event.attributes.items():
            if name in HEADER_FIELDS:
                raise UnsupportedAttributeEncodingError(
                    f"Attribute {name} collides with a JSON header field"
                )
            if value.case not in (AttrCase.STRING, AttrCase.INTEGER):
                raise UnsupportedAttributeEncodingError(
                    f"Attribute {name} of type {value.case} cannot be represented in JSON"
                )
            document[name] = value.payload

        separators = None if self.indent is not None else (",", ":")
        return json.dumps(document, indent=self.indent, separators=separators).encode("utf-8")

    def _decode(self, data: bytes) -> CloudEvent:
        try:
            document = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            logger.error(f"Failed to parse CloudEvent JSON: {e}")
            raise MalformedInputError(f"Failed to parse CloudEvent JSON: {e}") from e

        if not isinstance(document, dict):
            logger.error(f"CloudEvent JSON must be an object, got {json_type_name(document)}")
            raise MalformedInputError(
                f"CloudEvent JSON must be an object, got {json_type_name(document)}"
            )

        fields: Dict[str, Any] = {}
        attributes: Dict[str, AttributeValue] = {}
        for name, value in document.items():
            if name in HEADER_FIELDS:
                if not isinstance(value, str):
                    logger.error(f"Unsupported json type {json_type_name(value)} for {name}")
                    raise UnsupportedAttributeEncodingError(
                        f"Unsupported json type {json_type_name(value)} for {name}"
                    )
                fields[HEADER_FIELDS[name]] = value
            else:
                try:
                    attributes[name] = _decode_attribute(name, value)
                except UnsupportedAttributeEncodingError as e:
                    logger.error(str(e))
                    raise

        return CloudEvent(attributes=attributes, **fields)
