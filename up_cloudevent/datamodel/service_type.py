"""
uProtocol message kinds carried in the CloudEvent ``type`` header.
"""

from enum import IntEnum
from typing import Mapping, Optional

from up_cloudevent.datamodel.registry import Registry


class UMessageType(IntEnum):
    """uProtocol message type, numbered as in ``uattributes.proto``."""
    UMESSAGE_TYPE_UNSPECIFIED = 0
    UMESSAGE_TYPE_PUBLISH = 1
    UMESSAGE_TYPE_REQUEST = 2
    UMESSAGE_TYPE_RESPONSE = 3
    UMESSAGE_TYPE_FILE = 4


PUBLISH_MSG_TYPE_V1 = "pub.v1"
FILE_MSG_TYPE_V1 = "file.v1"
REQUEST_MSG_TYPE_V1 = "req.v1"
RESPONSE_MSG_TYPE_V1 = "res.v1"

DEFAULT_SERVICE_TYPES = {
    PUBLISH_MSG_TYPE_V1: UMessageType.UMESSAGE_TYPE_PUBLISH,
    FILE_MSG_TYPE_V1: UMessageType.UMESSAGE_TYPE_FILE,
    REQUEST_MSG_TYPE_V1: UMessageType.UMESSAGE_TYPE_REQUEST,
    RESPONSE_MSG_TYPE_V1: UMessageType.UMESSAGE_TYPE_RESPONSE,
}


class ServiceTypeRegistry(Registry[UMessageType]):
    """Maps the ``type`` header to a ``UMessageType``."""

    def __init__(self, table: Optional[Mapping[str, UMessageType]] = None):
        super().__init__(
            DEFAULT_SERVICE_TYPES if table is None else table,
            UMessageType.UMESSAGE_TYPE_UNSPECIFIED,
        )


default_service_types = ServiceTypeRegistry()


def get_message_type(token: str) -> UMessageType:
    return default_service_types.resolve(token)


def get_message_type_string(message_type: UMessageType) -> str:
    return default_service_types.to_string(message_type)
