"""
Common uProtocol CloudEvent attributes and their builder.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

from up_cloudevent.datamodel.attribute_value import INT32_MAX, AttributeValue, CeInteger, CeString

HASH_KEY = "hash"
PRIORITY_KEY = "priority"
TTL_KEY = "ttl"
TOKEN_KEY = "token"
TRACEPARENT_KEY = "traceparent"


class UPriority(IntEnum):
    """uProtocol message priority (QoS class)."""
    UPRIORITY_UNSPECIFIED = 0
    UPRIORITY_CS0 = 1
    UPRIORITY_CS1 = 2
    UPRIORITY_CS2 = 3
    UPRIORITY_CS3 = 4
    UPRIORITY_CS4 = 5
    UPRIORITY_CS5 = 6
    UPRIORITY_CS6 = 7


@dataclass(frozen=True)
class UCloudEventAttributes:
    """
    Snapshot of the common attributes callers attach to a CloudEvent.

    Build instances with ``UCloudEventAttributes.Builder``; a default
    instance is the empty attribute set.
    """

    hash: str = ""
    priority: UPriority = UPriority.UPRIORITY_UNSPECIFIED
    ttl: int = 0
    token: str = ""
    traceparent: str = ""

    class Builder:
        """
        Chainable accumulator for ``UCloudEventAttributes``.

        ``build`` snapshots the current state and does not reset it, so the
        same builder can produce several progressively richer snapshots.
        """

        def __init__(self):
            self._hash = ""
            self._priority = UPriority.UPRIORITY_UNSPECIFIED
            self._ttl = 0
            self._token = ""
            self._traceparent = ""

        def with_hash(self, hash: str) -> "UCloudEventAttributes.Builder":
            self._hash = hash
            return self

        def with_priority(self, priority: UPriority) -> "UCloudEventAttributes.Builder":
            self._priority = priority
            return self

        def with_ttl(self, ttl: int) -> "UCloudEventAttributes.Builder":
            self._ttl = ttl
            return self

        def with_token(self, token: str) -> "UCloudEventAttributes.Builder":
            self._token = token
            return self

        def with_traceparent(self, traceparent: str) -> "UCloudEventAttributes.Builder":
            self._traceparent = traceparent
            return self

        def with_current_traceparent(self) -> "UCloudEventAttributes.Builder":
            """Set traceparent from the active OpenTelemetry span, if any."""
            from up_cloudevent.observability.telemetry import current_traceparent

            self._traceparent = current_traceparent() or ""
            return self

        def build(self) -> "UCloudEventAttributes":
            return UCloudEventAttributes(
                hash=self._hash,
                priority=self._priority,
                ttl=self._ttl,
                token=self._token,
                traceparent=self._traceparent,
            )

    def is_empty(self) -> bool:
        return (
            not self.hash
            and self.priority == UPriority.UPRIORITY_UNSPECIFIED
            and self.ttl == 0
            and not self.token
            and not self.traceparent
        )

    def to_attribute_map(self) -> Dict[str, AttributeValue]:
        """
        Convert the non-default fields into CloudEvent attribute values.

        ``ttl`` is carried as a ``ce_integer`` attribute, so only values up to
        ``INT32_MAX`` can be converted even though the field itself is unsigned.

        Returns:
            attributes: Attribute name -> value, ready to merge into a CloudEvent

        Raises:
            ValueError: If ttl does not fit in a signed 32-bit integer
        """
        attributes: Dict[str, AttributeValue] = {}
        if self.hash:
            attributes[HASH_KEY] = CeString(self.hash)
        if self.priority != UPriority.UPRIORITY_UNSPECIFIED:
            attributes[PRIORITY_KEY] = CeString(UPriority(self.priority).name)
        if self.ttl:
            if self.ttl > INT32_MAX:
                raise ValueError(f"ttl {self.ttl} exceeds the ce_integer maximum {INT32_MAX}")
            attributes[TTL_KEY] = CeInteger(self.ttl)
        if self.token:
            attributes[TOKEN_KEY] = CeString(self.token)
        if self.traceparent:
            attributes[TRACEPARENT_KEY] = CeString(self.traceparent)
        return attributes

    def to_string(self) -> str:
        return (
            f"UCloudEventAttributes{{hash={self.hash}, priority={int(self.priority)}, "
            f"ttl={self.ttl}, token={self.token}, traceparent={self.traceparent}}}"
        )

    def __str__(self) -> str:
        return self.to_string()
