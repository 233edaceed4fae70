#!/usr/bin/env python3
"""
uProtocol CloudEvent Demo

This example builds a request CloudEvent, validates it, and round-trips it
through both serialization formats:
- Common attributes assembled with the attribute builder
- Validation diagnostics for an invalid request
- Protobuf and JSON serialization
"""

import logging

from up_cloudevent import (
    CeInteger,
    CeString,
    CloudEvent,
    CloudEventConfig,
    CloudEventSerializationError,
    UCloudEventAttributes,
    UPriority,
)

# Configure logging
config = CloudEventConfig(configure_logging=True, log_level=logging.INFO)
logger = logging.getLogger(__name__)


def demonstrate_cloudevents():
    """Demonstrate validation and serialization of CloudEvents."""
    common = (
        UCloudEventAttributes.Builder()
        .with_priority(UPriority.UPRIORITY_CS4)
        .with_ttl(1000)
        .with_token("demo-token")
        .build()
    )
    logger.info(f"Common attributes: {common}")

    attributes = common.to_attribute_map()
    attributes["sink"] = CeString("up://vehicle/body.access/1/rpc.UpdateDoor")

    request = CloudEvent(
        id="0191e0b6-2a1c-7000-8000-000000000001",
        source="up://app/demo/1/rpc.response",
        spec_version="v1",
        type="req.v1",
        data="open",
        attributes=attributes,
    )

    validator = config.create_validator()
    logger.info(f"Request valid: {validator.is_valid_event(request)}")

    bad_request = request.with_attribute("ttl", CeString("1000"))
    result = validator.validate(bad_request)
    logger.info(f"Bad request valid: {result.valid} ({result.error}, {result.message})")

    for serialization_format in ("protobuf", "json"):
        serializer = config.create_serializer(serialization_format)
        data = serializer.serialize(request)
        logger.info(f"{serialization_format}: {len(data)} bytes ({serializer.content_type})")

        decoded = serializer.deserialize(data)
        logger.info(f"{serialization_format}: round trip equal = {decoded == request}")

        try:
            serializer.serialize(bad_request)
        except CloudEventSerializationError as e:
            logger.info(f"{serialization_format}: rejected bad request: {e}")

    logger.info(f"Integer ttl restored: {decoded.attributes['ttl'] == CeInteger(1000)}")


if __name__ == "__main__":
    demonstrate_cloudevents()
