"""
Validation of uProtocol CloudEvents.

A CloudEvent is valid when its mandatory header fields are present, its
``type`` and ``specversion`` headers are recognised, and every attribute the
message kind requires is present with the expected variant. The per-kind
requirements are plain data, so supporting a new kind means adding a table
entry rather than code.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from up_cloudevent.datamodel.attribute_value import AttrCase
from up_cloudevent.datamodel.envelope import CloudEvent
from up_cloudevent.datamodel.service_type import (
    ServiceTypeRegistry,
    UMessageType,
    default_service_types,
)
from up_cloudevent.datamodel.spec_version import (
    SpecVersion,
    SpecVersionRegistry,
    default_spec_versions,
)
from up_cloudevent.errors import ValidationError

logger = logging.getLogger("up_cloudevent.validate.validator")
# The constructor argument shadows the name above.
_module_logger = logger

TTL_KEY = "ttl"
SINK_KEY = "sink"
DATA_SCHEMA_KEY = "dataschema"
DATA_CONTENT_TYPE_KEY = "datacontenttype"
REQ_ID_KEY = "reqid"
DATA_KEY = "data"
HASH_KEY = "hash"
PRIORITY_KEY = "priority"

CONTENT_TYPE = "application/x-protobuf"
PROTO_CONTENT_TYPE = "application/cloudevents+protobuf"
PROTO_DATA_CONTENT_TYPE = "application/protobuf"
JSON_CONTENT_TYPE = "application/cloudevents+json"


@dataclass(frozen=True)
class MandatoryAttributeRule:
    """An attribute a message kind requires, with its required variant."""
    name: str
    case: AttrCase


RuleTable = Mapping[UMessageType, Tuple[MandatoryAttributeRule, ...]]


def freeze_rules(
    rules: Mapping[UMessageType, Iterable[MandatoryAttributeRule]]
) -> RuleTable:
    """Copy a rule table into an immutable one."""
    return MappingProxyType({kind: tuple(entries) for kind, entries in rules.items()})


DEFAULT_MANDATORY_ATTRIBUTES: RuleTable = freeze_rules({
    UMessageType.UMESSAGE_TYPE_PUBLISH: (),
    UMessageType.UMESSAGE_TYPE_FILE: (),
    UMessageType.UMESSAGE_TYPE_REQUEST: (
        MandatoryAttributeRule(TTL_KEY, AttrCase.INTEGER),
        MandatoryAttributeRule(SINK_KEY, AttrCase.STRING),
    ),
    UMessageType.UMESSAGE_TYPE_RESPONSE: (
        MandatoryAttributeRule(TTL_KEY, AttrCase.INTEGER),
        MandatoryAttributeRule(SINK_KEY, AttrCase.STRING),
        MandatoryAttributeRule(DATA_KEY, AttrCase.STRING),
        MandatoryAttributeRule(REQ_ID_KEY, AttrCase.STRING),
        MandatoryAttributeRule(DATA_SCHEMA_KEY, AttrCase.STRING),
    ),
})


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating a CloudEvent.

    ``error`` and ``message`` are set only on failure; ``attribute`` names the
    offending attribute for attribute-level failures.
    """
    valid: bool
    error: Optional[ValidationError] = None
    message: str = ""
    attribute: Optional[str] = None
    expected: Optional[AttrCase] = None
    actual: Optional[AttrCase] = None

    def __bool__(self) -> bool:
        return self.valid


_VALID = ValidationResult(valid=True)


class CloudEventValidator:
    """
    Validator for uProtocol CloudEvents.

    The validator holds only immutable tables, so one instance can be shared
    between threads. Checks run in a fixed order and stop at the first
    failure, which determines the diagnostic that is reported.
    """

    def __init__(
        self,
        rules: Optional[Mapping[UMessageType, Iterable[MandatoryAttributeRule]]] = None,
        service_types: Optional[ServiceTypeRegistry] = None,
        spec_versions: Optional[SpecVersionRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the validator.

        Args:
            rules: Mandatory attributes per message kind (default: uProtocol rules)
            service_types: Registry resolving the ``type`` header
            spec_versions: Registry resolving the ``specversion`` header
            logger: Logger receiving diagnostics (default: module logger)
        """
        self.rules = (
            DEFAULT_MANDATORY_ATTRIBUTES if rules is None else freeze_rules(rules)
        )
        self.service_types = service_types or default_service_types
        self.spec_versions = spec_versions or default_spec_versions
        self.logger = logger if logger is not None else _module_logger

    def is_valid_event(self, cloud_event: CloudEvent) -> bool:
        """
        Check whether a CloudEvent is valid.

        Args:
            cloud_event: CloudEvent to check

        Returns:
            is_valid: Whether all validation steps pass
        """
        return self.validate(cloud_event).valid

    def validate(self, cloud_event: CloudEvent) -> ValidationResult:
        """
        Validate a CloudEvent and describe the first failure.

        Args:
            cloud_event: CloudEvent to check

        Returns:
            result: Validation outcome with diagnostic
        """
        for check in (self._check_header, self._check_type, self._check_spec_version):
            result = check(cloud_event)
            if result is not None:
                return result

        kind = self.service_types.resolve(cloud_event.type)
        for rule in self.rules.get(kind, ()):
            result = self._check_attribute(cloud_event, rule)
            if result is not None:
                return result

        return _VALID

    def _fail(self, error: ValidationError, message: str, **details) -> ValidationResult:
        self.logger.info(message)
        return ValidationResult(valid=False, error=error, message=message, **details)

    def _check_header(self, cloud_event: CloudEvent) -> Optional[ValidationResult]:
        if cloud_event.is_complete():
            return None
        missing = [
            name for name in ("id", "source", "spec_version", "type")
            if not getattr(cloud_event, name)
        ]
        return self._fail(
            ValidationError.MISSING_MANDATORY_FIELD,
            f"Mandatory header value missing: {', '.join(missing)}",
        )

    def _check_type(self, cloud_event: CloudEvent) -> Optional[ValidationResult]:
        kind = self.service_types.resolve(cloud_event.type)
        if kind != UMessageType.UMESSAGE_TYPE_UNSPECIFIED:
            return None
        return self._fail(
            ValidationError.UNSUPPORTED_KIND,
            f"Service type not supported: {cloud_event.type}",
        )

    def _check_spec_version(self, cloud_event: CloudEvent) -> Optional[ValidationResult]:
        version = self.spec_versions.resolve(cloud_event.spec_version)
        if version != SpecVersion.NOT_DEFINED:
            return None
        return self._fail(
            ValidationError.UNSUPPORTED_SPEC_VERSION,
            f"SpecVersion is not supported: {cloud_event.spec_version}",
        )

    def _check_attribute(
        self, cloud_event: CloudEvent, rule: MandatoryAttributeRule
    ) -> Optional[ValidationResult]:
        value = cloud_event.attributes.get(rule.name)
        if value is None:
            return self._fail(
                ValidationError.MISSING_ATTRIBUTE,
                f"Required attribute {rule.name} of type {rule.case} "
                f"for message {cloud_event.type} is missing",
                attribute=rule.name,
                expected=rule.case,
            )
        if value.case is not rule.case:
            return self._fail(
                ValidationError.ATTRIBUTE_TYPE_MISMATCH,
                f"Required attribute {rule.name} of type {rule.case} "
                f"for message {cloud_event.type}, type is set to {value.case}",
                attribute=rule.name,
                expected=rule.case,
                actual=value.case,
            )
        return None


default_validator = CloudEventValidator()


def is_valid_event(cloud_event: CloudEvent) -> bool:
    """Validate with the default uProtocol rules."""
    return default_validator.is_valid_event(cloud_event)
