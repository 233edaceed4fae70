"""
CloudEvent envelope value type.

The envelope carries the four mandatory header fields, an optional inline
payload and a mapping of named, typed attributes.
"""

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from up_cloudevent.datamodel.attribute_value import AttributeValue

Payload = Union[bytes, str]


@dataclass(frozen=True)
class CloudEvent:
    """
    uProtocol CloudEvent envelope.

    All header fields default to the empty string, so ``CloudEvent()`` is the
    empty envelope. ``attributes`` is exposed as a read-only mapping; use
    ``replace`` or ``with_attribute`` to derive modified copies.
    """

    id: str = ""
    source: str = ""
    spec_version: str = ""
    type: str = ""
    data: Optional[Payload] = None
    attributes: Mapping[str, AttributeValue] = field(
        default_factory=dict, hash=False
    )

    def __post_init__(self):
        for name in ("id", "source", "spec_version", "type"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"CloudEvent.{name} must be a string")

        if isinstance(self.data, (bytearray, memoryview)):
            object.__setattr__(self, "data", bytes(self.data))
        elif self.data is not None and not isinstance(self.data, (bytes, str)):
            raise TypeError("CloudEvent.data must be bytes, str or None")

        attributes = dict(self.attributes)
        for name, value in attributes.items():
            if not isinstance(value, AttributeValue):
                raise TypeError(f"Attribute {name!r} is not an AttributeValue")
        object.__setattr__(self, "attributes", MappingProxyType(attributes))

    def is_complete(self) -> bool:
        """Whether all four mandatory header fields are non-empty."""
        return bool(self.id and self.source and self.spec_version and self.type)

    def get_attribute(self, name: str) -> Optional[AttributeValue]:
        return self.attributes.get(name)

    def replace(self, **changes: Any) -> "CloudEvent":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def with_attribute(self, name: str, value: AttributeValue) -> "CloudEvent":
        """Return a copy with one attribute added or replaced."""
        attributes = dict(self.attributes)
        attributes[name] = value
        return dataclasses.replace(self, attributes=attributes)

    def without_attribute(self, name: str) -> "CloudEvent":
        attributes = dict(self.attributes)
        attributes.pop(name, None)
        return dataclasses.replace(self, attributes=attributes)
