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

"""CLI entry point for linting charm metadata files."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from ..config import metadata_config
from ..utils.logging_utils import level_for_verbosity
from . import lint_files, LintResult

logger = logging.getLogger(__name__)

METADATA_FILE_NAMES = ('metadata.yaml', 'metadata.yml')


def find_metadata_files(paths: List[str]) -> List[Path]:
    """Find all charm metadata files in given paths."""
    metadata_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            # Explicitly named files are linted whatever their name.
            metadata_files.append(path)
        elif path.is_dir():
            for name in METADATA_FILE_NAMES:
                metadata_files.extend(path.rglob(name))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(metadata_files))


def _print_human(results: List[LintResult]) -> None:
    for result in results:
        if result.errors or result.warnings:
            print(f"\n{result.file_path}:")
            for error in result.errors:
                line_info = f":{error['line']}" if 'line' in error else ""
                print(f"  ERROR{line_info}: {error['message']}")
            for warning in result.warnings:
                line_info = f":{warning['line']}" if 'line' in warning else ""
                print(f"  WARNING{line_info}: {warning['message']}")


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the linter CLI."""
    parser = argparse.ArgumentParser(
        description='Lint charm metadata.yaml files',
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
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase log verbosity (repeatable)',
    )

    args = parser.parse_args(argv)

    metadata_config.set_logging()
    if args.verbose:
        root = logging.getLogger()
        root.setLevel(level_for_verbosity(args.verbose, root.level))

    if not args.paths:
        args.paths = ['.']

    files = find_metadata_files(args.paths)
    logger.debug(f"Linting {len(files)} metadata file(s)")

    if not files:
        print("No charm metadata files found.", file=sys.stderr)
        sys.exit(1)

    results = lint_files(files)

    if args.format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif args.format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
            for warning in result.warnings:
                print(f"::warning file={result.file_path},line={warning.get('line', 1)}::{warning['message']}")
    else:
        _print_human(results)

    if any(r.has_errors for r in results):
        sys.exit(1)
    if args.format == 'human':
        print("Lint succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
