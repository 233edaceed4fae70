"""
Typed CloudEvent attribute values.

An attribute value is one of eight variants, mirroring the ``attr`` one-of of
the CloudEvents protobuf format. Each variant is its own frozen dataclass so
equality is structural (variant + payload) and instances are immutable.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, ClassVar, Mapping, Optional, TypeVar

from up_cloudevent.errors import TypeMismatchError

T = TypeVar("T")

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


class AttrCase(Enum):
    """Active variant of an attribute value.

    Values are the field names of the protobuf ``attr`` one-of.
    """
    BOOLEAN = "ce_boolean"
    INTEGER = "ce_integer"
    STRING = "ce_string"
    BYTES = "ce_bytes"
    URI = "ce_uri"
    URI_REF = "ce_uri_ref"
    TIMESTAMP = "ce_timestamp"
    ATTR_NOT_SET = "attr_not_set"

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_field_name(cls, field_name: Optional[str]) -> "AttrCase":
        """Map a protobuf one-of field name (or None) to a case."""
        if field_name is None:
            return cls.ATTR_NOT_SET
        return cls(field_name)


class AttributeValue:
    """
    Base class of the attribute value variants.

    Use the variant classes directly (``CeString("x")``) or the factory
    helpers (``AttributeValue.of_string("x")``).
    """

    case: ClassVar[AttrCase] = AttrCase.ATTR_NOT_SET

    @property
    def payload(self) -> Any:
        return getattr(self, "value", None)

    def get(self, case: AttrCase) -> Any:
        """
        Read the payload as the given variant.

        Args:
            case: Variant the caller expects

        Returns:
            payload: The wrapped value

        Raises:
            TypeMismatchError: If ``case`` is not the active variant
        """
        if case is not self.case:
            raise TypeMismatchError(
                f"Attribute value holds {self.case}, not {case}"
            )
        return self.payload

    def visit(self, handlers: Mapping[AttrCase, Callable[[Any], T]]) -> T:
        """
        Dispatch on the active variant.

        Args:
            handlers: Callable per variant, called with the payload

        Returns:
            result: Whatever the matching handler returns
        """
        handler = handlers.get(self.case)
        if handler is None:
            raise TypeMismatchError(f"No handler for attribute variant {self.case}")
        return handler(self.payload)

    @staticmethod
    def of_string(value: str) -> "CeString":
        return CeString(value)

    @staticmethod
    def of_integer(value: int) -> "CeInteger":
        return CeInteger(value)

    @staticmethod
    def of_boolean(value: bool) -> "CeBoolean":
        return CeBoolean(value)

    @staticmethod
    def of_bytes(value: bytes) -> "CeBytes":
        return CeBytes(value)

    @staticmethod
    def of_uri(value: str) -> "CeUri":
        return CeUri(value)

    @staticmethod
    def of_uri_ref(value: str) -> "CeUriRef":
        return CeUriRef(value)

    @staticmethod
    def of_timestamp(value: datetime) -> "CeTimestamp":
        return CeTimestamp(value)

    @staticmethod
    def unset() -> "CeUnset":
        return CeUnset()


def _require(value: Any, expected: type, case: AttrCase):
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise TypeError(
            f"{case} attribute requires {expected.__name__}, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class CeBoolean(AttributeValue):
    value: bool
    case: ClassVar[AttrCase] = AttrCase.BOOLEAN

    def __post_init__(self):
        _require(self.value, bool, self.case)


@dataclass(frozen=True)
class CeInteger(AttributeValue):
    """Signed 32-bit integer attribute."""
    value: int
    case: ClassVar[AttrCase] = AttrCase.INTEGER

    def __post_init__(self):
        _require(self.value, int, self.case)
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f"Integer attribute out of int32 range: {self.value}")


@dataclass(frozen=True)
class CeString(AttributeValue):
    value: str
    case: ClassVar[AttrCase] = AttrCase.STRING

    def __post_init__(self):
        _require(self.value, str, self.case)


@dataclass(frozen=True)
class CeBytes(AttributeValue):
    value: bytes
    case: ClassVar[AttrCase] = AttrCase.BYTES

    def __post_init__(self):
        if isinstance(self.value, (bytearray, memoryview)):
            object.__setattr__(self, "value", bytes(self.value))
        _require(self.value, bytes, self.case)


@dataclass(frozen=True)
class CeUri(AttributeValue):
    value: str
    case: ClassVar[AttrCase] = AttrCase.URI

    def __post_init__(self):
        _require(self.value, str, self.case)


@dataclass(frozen=True)
class CeUriRef(AttributeValue):
    value: str
    case: ClassVar[AttrCase] = AttrCase.URI_REF

    def __post_init__(self):
        _require(self.value, str, self.case)


@dataclass(frozen=True)
class CeTimestamp(AttributeValue):
    """
    Timestamp attribute.

    Stored as an aware UTC datetime; naive datetimes are taken to be UTC.
    """
    value: datetime
    case: ClassVar[AttrCase] = AttrCase.TIMESTAMP

    def __post_init__(self):
        _require(self.value, datetime, self.case)
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=timezone.utc))
        else:
            object.__setattr__(self, "value", self.value.astimezone(timezone.utc))


@dataclass(frozen=True)
class CeUnset(AttributeValue):
    """An attribute entry whose value has no variant set."""
    case: ClassVar[AttrCase] = AttrCase.ATTR_NOT_SET
