#!/usr/bin/env python3
"""
CloudEvent tool for up-cloudevent.

This command-line utility validates, inspects and converts serialized
uProtocol CloudEvents between the protobuf and JSON formats.
"""

import argparse
import json
import sys
from pathlib import Path

from up_cloudevent.datamodel.attribute_value import AttrCase
from up_cloudevent.errors import CloudEventSerializationError
from up_cloudevent.serialize.factory import get_serializer


def detect_format(path: str) -> str:
    """Infer the serialization format from a file extension."""
    return "json" if Path(path).suffix.lower() == ".json" else "protobuf"


def _read(path: str, serialization_format: str):
    data = Path(path).read_bytes()
    return get_serializer(serialization_format or detect_format(path)).deserialize(data)


def _describe_value(value) -> str:
    if value.case is AttrCase.ATTR_NOT_SET:
        return "<unset>"
    if value.case is AttrCase.TIMESTAMP:
        return value.payload.isoformat()
    if value.case is AttrCase.BYTES:
        return value.payload.hex()
    return str(value.payload)


def cmd_validate(args):
    """Validate a serialized CloudEvent."""
    try:
        cloud_event = _read(args.file, args.format)
    except CloudEventSerializationError as e:
        print(f"Invalid: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    print(f"Valid: {cloud_event.type} CloudEvent {cloud_event.id}")
    return 0


def cmd_info(args):
    """Display the contents of a serialized CloudEvent."""
    try:
        cloud_event = _read(args.file, args.format)
    except (CloudEventSerializationError, OSError) as e:
        print(f"Error reading CloudEvent: {e}", file=sys.stderr)
        return 1

    print(f"CloudEvent: {args.file}")
    print("=" * 50)
    print(f"ID: {cloud_event.id}")
    print(f"Source: {cloud_event.source}")
    print(f"Spec Version: {cloud_event.spec_version}")
    print(f"Type: {cloud_event.type}")

    if isinstance(cloud_event.data, bytes):
        print(f"Data: {len(cloud_event.data):,} bytes")
    elif cloud_event.data is not None:
        print(f"Data: {json.dumps(cloud_event.data)}")

    if cloud_event.attributes:
        print("Attributes:")
        for name in sorted(cloud_event.attributes):
            value = cloud_event.attributes[name]
            print(f"  {name} ({value.case}): {_describe_value(value)}")

    return 0


def cmd_convert(args):
    """Convert a CloudEvent between formats."""
    source_format = args.source_format or detect_format(args.source)
    target_format = args.target_format or detect_format(args.target)

    try:
        cloud_event = _read(args.source, source_format)
        data = get_serializer(target_format).serialize(cloud_event)
        Path(args.target).write_bytes(data)
    except (CloudEventSerializationError, OSError) as e:
        print(f"Conversion failed: {e}", file=sys.stderr)
        return 1

    print(f"Converted {args.source} ({source_format}) to {args.target} ({target_format})")
    return 0


def create_parser():
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="cetool",
        description="uProtocol CloudEvent Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a serialized CloudEvent
  cetool validate request.pb

  # Show the header fields and attributes of a CloudEvent
  cetool info request.json

  # Convert a JSON CloudEvent to the protobuf format
  cetool convert request.json request.pb
        """
    )
    formats = ["protobuf", "json"]

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate a serialized CloudEvent")
    validate_parser.add_argument("file", help="Path to serialized CloudEvent")
    validate_parser.add_argument("--format", choices=formats,
                                 help="Input format (default: from extension)")

    info_parser = subparsers.add_parser("info", help="Display CloudEvent contents")
    info_parser.add_argument("file", help="Path to serialized CloudEvent")
    info_parser.add_argument("--format", choices=formats,
                             help="Input format (default: from extension)")

    convert_parser = subparsers.add_parser("convert", help="Convert between formats")
    convert_parser.add_argument("source", help="Source file")
    convert_parser.add_argument("target", help="Target file")
    convert_parser.add_argument("--from", dest="source_format", choices=formats,
                                help="Source format (default: from extension)")
    convert_parser.add_argument("--to", dest="target_format", choices=formats,
                                help="Target format (default: from extension)")

    return parser


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "validate": cmd_validate,
        "info": cmd_info,
        "convert": cmd_convert,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
