#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for linting port-call event files."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import validator_config
from ..exceptions import SchemaVersionError
from ..file_io.event_loader import EVENT_FILE_EXTENSIONS
from ..models.registry import get_registry
from . import LintResult, lint_files


def find_event_files(paths: List[str]) -> List[Path]:
    """Find all event files (.json, .yaml, .yml) in given paths."""
    event_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if path.suffix.lower() in EVENT_FILE_EXTENSIONS:
                event_files.append(path)
            else:
                print(f"Warning: File is not a JSON or YAML event file: {path}", file=sys.stderr)
        elif path.is_dir():
            for ext in EVENT_FILE_EXTENSIONS:
                event_files.extend(path.rglob(f'*{ext}'))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(event_files))


def _location(result: LintResult, entry: dict) -> str:
    line_info = f":{entry['line']}" if 'line' in entry else ""
    path_info = f" {entry['path']}" if entry.get('path') else ""
    return f"{result.file_path}{line_info}{path_info}"


def print_results(results: List[LintResult], output_format: str) -> None:
    if output_format == 'json':
        output = {
            'files': len(results),
            'events': sum(r.events for r in results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
            for warning in result.warnings:
                print(f"::warning file={result.file_path},line={warning.get('line', 1)}::{warning['message']}")
    else:  # human-readable
        for result in results:
            if result.errors or result.warnings:
                print(f"\n{result.file_path}:")
                for error in result.errors:
                    rule = f" [{error['rule']}]" if 'rule' in error else ""
                    print(f"  ERROR {_location(result, error)}{rule}: {error['message']}")
                for warning in result.warnings:
                    rule = f" [{warning['rule']}]" if 'rule' in warning else ""
                    print(f"  WARNING {_location(result, warning)}{rule}: {warning['message']}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the linter CLI."""
    parser = argparse.ArgumentParser(
        description='Lint port-call event files (JSON or YAML)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='File paths or directories to lint (default: current directory)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--schema-version',
        default=None,
        help="Schema version to validate against (default: each event's own 'version')",
    )

    args = parser.parse_args(argv)
    validator_config.set_logging()
    if args.format != 'human':
        # stdout carries the report only
        root_logger = logging.getLogger()
        root_logger.setLevel(max(root_logger.level, logging.WARNING))

    if args.schema_version is not None:
        try:
            get_registry(args.schema_version)
        except SchemaVersionError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(2)

    if not args.paths:
        args.paths = ['.']

    event_files = find_event_files(args.paths)

    if not event_files:
        print("No event files found.", file=sys.stderr)
        sys.exit(1)

    results = lint_files(event_files, version=args.schema_version)
    print_results(results, args.format)

    # Exit with error code if any errors found
    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print(f"Lint succeeded with no errors ({sum(r.events for r in results)} events checked).")
    sys.exit(0)


if __name__ == '__main__':
    main()
