"""
Configuration for the up_cloudevent package.

``CloudEventConfig`` gathers the tables the validator runs on and the
serializer choice, and builds configured validators and serializers.
"""

import logging
from typing import Iterable, Mapping, Optional

from up_cloudevent.datamodel.service_type import ServiceTypeRegistry, UMessageType
from up_cloudevent.datamodel.spec_version import SpecVersion, SpecVersionRegistry
from up_cloudevent.observability.telemetry import CloudEventTelemetry
from up_cloudevent.serialize.base import CloudEventSerializer
from up_cloudevent.serialize.factory import SERIALIZERS, get_serializer
from up_cloudevent.validate.validator import CloudEventValidator, MandatoryAttributeRule

logger = logging.getLogger("up_cloudevent")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CloudEventConfig:
    """Configuration for CloudEvent validation and serialization."""

    def __init__(
        self,
        serialization_format: str = "protobuf",
        log_level: int = logging.INFO,
        configure_logging: bool = False,
        spec_versions: Optional[Mapping[str, SpecVersion]] = None,
        service_types: Optional[Mapping[str, UMessageType]] = None,
        mandatory_attributes: Optional[Mapping[UMessageType, Iterable[MandatoryAttributeRule]]] = None,
        tracing_enabled: bool = False,
        service_name: str = "up-cloudevent",
    ):
        """
        Initialize configuration.

        Args:
            serialization_format: Serialization format ("protobuf", "json")
            log_level: Logging level
            configure_logging: Whether to install a root logging handler
            spec_versions: Accepted ``specversion`` headers (default: "v1")
            service_types: Accepted ``type`` headers (default: uProtocol v1 kinds)
            mandatory_attributes: Required attributes per message kind
            tracing_enabled: Whether serializers report OpenTelemetry spans and metrics
            service_name: Service name recorded by telemetry
        """
        self.serialization_format = serialization_format.lower()
        self.log_level = log_level
        self.spec_versions = spec_versions
        self.service_types = service_types
        self.mandatory_attributes = mandatory_attributes
        self.tracing_enabled = tracing_enabled
        self.service_name = service_name

        if configure_logging:
            logging.basicConfig(level=log_level, format=LOG_FORMAT)
        logger.setLevel(log_level)

        self._validate_config()

    def _validate_config(self):
        """Validate the configured tables and format."""
        if self.serialization_format not in SERIALIZERS:
            raise ValueError(f"Unknown serialization format: {self.serialization_format}")

        if self.mandatory_attributes is not None and self.service_types is not None:
            known = set(self.service_types.values())
            for kind in self.mandatory_attributes:
                if kind not in known:
                    logger.warning(
                        f"Mandatory attributes configured for {kind.name}, "
                        "which no service type maps to"
                    )

        if self.spec_versions is not None and not self.spec_versions:
            logger.warning("No spec versions configured, every CloudEvent will be rejected")

    def create_validator(self) -> CloudEventValidator:
        """Build a validator from the configured tables."""
        return CloudEventValidator(
            rules=self.mandatory_attributes,
            service_types=ServiceTypeRegistry(self.service_types),
            spec_versions=SpecVersionRegistry(self.spec_versions),
        )

    def create_telemetry(self) -> Optional[CloudEventTelemetry]:
        if not self.tracing_enabled:
            return None
        return CloudEventTelemetry(service_name=self.service_name)

    def create_serializer(self, serialization_format: Optional[str] = None) -> CloudEventSerializer:
        """
        Build a serializer using this configuration's validator.

        Args:
            serialization_format: Override of the configured format

        Returns:
            serializer: Configured serializer
        """
        return get_serializer(
            serialization_format or self.serialization_format,
            validator=self.create_validator(),
            telemetry=self.create_telemetry(),
        )
