"""
Validation of uProtocol CloudEvents against per-kind attribute rules.
"""

from up_cloudevent.validate.validator import (
    DEFAULT_MANDATORY_ATTRIBUTES,
    CloudEventValidator,
    MandatoryAttributeRule,
    ValidationResult,
    is_valid_event,
)

__all__ = [
    "DEFAULT_MANDATORY_ATTRIBUTES",
    "CloudEventValidator",
    "MandatoryAttributeRule",
    "ValidationResult",
    "is_valid_event",
]
