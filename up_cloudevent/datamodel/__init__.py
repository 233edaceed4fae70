"""
Data model for uProtocol CloudEvents.

This package provides the typed attribute values, the CloudEvent envelope,
the spec-version and message-type registries and the common attribute set.
"""

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
from up_cloudevent.datamodel.attributes import UCloudEventAttributes, UPriority
from up_cloudevent.datamodel.envelope import CloudEvent
from up_cloudevent.datamodel.service_type import ServiceTypeRegistry, UMessageType
from up_cloudevent.datamodel.spec_version import SpecVersion, SpecVersionRegistry

__all__ = [
    "AttrCase",
    "AttributeValue",
    "CeBoolean",
    "CeBytes",
    "CeInteger",
    "CeString",
    "CeTimestamp",
    "CeUnset",
    "CeUri",
    "CeUriRef",
    "CloudEvent",
    "ServiceTypeRegistry",
    "SpecVersion",
    "SpecVersionRegistry",
    "UCloudEventAttributes",
    "UMessageType",
    "UPriority",
]
