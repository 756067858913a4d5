#!/usr/bin/env python3

import argparse
import sys
from pathlib import Path

from portcall_event_validator.config import validator_config
from portcall_event_validator.exceptions import SchemaVersionError
from portcall_event_validator.models.registry import known_versions, latest_version
from portcall_event_validator.schema import write_json_schema


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render the port-call event schema as a JSON Schema (draft-07) artifact",
    )
    parser.add_argument(
        "output_dir",
        type=Path,
        help="Directory to write <version>/event.json into",
    )
    parser.add_argument(
        "--schema-version",
        default=None,
        help="Schema version to render (default: latest registered)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Render every registered schema version",
    )

    args = parser.parse_args()
    validator_config.set_logging()

    versions = list(known_versions()) if args.all else [args.schema_version or latest_version()]
    try:
        for version in versions:
            write_json_schema(version, args.output_dir / version / "event.json")
    except SchemaVersionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
