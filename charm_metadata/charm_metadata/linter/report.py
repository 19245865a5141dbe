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

"""Error reporting for the linter."""

from pathlib import Path
from typing import List, Dict, Any, Optional

from ..file_io.source_location import SourceLocation


def _entry(
    message: str,
    line: Optional[int],
    column: Optional[int],
    yaml_path: Optional[str],
) -> Dict[str, Any]:
    entry: Dict[str, Any] = {'message': message}
    if line is not None:
        entry['line'] = line
    if column is not None:
        entry['column'] = column
    if yaml_path is not None:
        entry['yaml_path'] = yaml_path
    return entry


class LintResult:
    """Container for linting results for a single metadata file."""

    def __init__(self, file_path: Path):
        """Initialize lint result.

        Args:
            file_path: Path to the file being linted
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        yaml_path: Optional[str] = None,
    ):
        """Add an error message, with its position in the file when known."""
        self.errors.append(_entry(message, line, column, yaml_path))

    def add_warning(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        yaml_path: Optional[str] = None,
    ):
        """Add a warning message, with its position in the file when known."""
        self.warnings.append(_entry(message, line, column, yaml_path))

    def add_error_at(self, message: str, loc: SourceLocation):
        self.add_error(message, line=loc.line, column=loc.column, yaml_path=loc.yaml_path)

    def add_warning_at(self, message: str, loc: SourceLocation):
        self.add_warning(message, line=loc.line, column=loc.column, yaml_path=loc.yaml_path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'errors': self.errors,
            'warnings': self.warnings,
        }
