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

"""Structure linter for charm metadata files.

Unlike the decoder, which stops at the first mismatch, this linter checks the
raw document against the JSON Schema generated from METADATA_SCHEMA and
reports every structural issue with its YAML location.
"""

from pathlib import Path
from typing import Any, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from ..file_io.source_location import SourceMap, lookup_source, format_source
from ..models.metadata_schema import metadata_json_schema
from ..models.schema import SchemaIssue, join_path
from .report import LintResult


def _issue_path(path) -> str:
    yaml_path = ""
    for token in path:
        yaml_path = join_path(yaml_path, token)
    return yaml_path


class StructureLinter:
    """Linter for document structure."""

    OBSOLETE_FIELDS = {
        'revision': "Field 'revision' is obsolete; the revision is kept outside metadata.yaml",
    }

    def __init__(self):
        """Initialize the structure linter."""
        self._validator = Draft7Validator(metadata_json_schema())

    def structural_issues(self, data: Any) -> List[SchemaIssue]:
        """Return every structural issue in ``data``, sorted by location."""
        issues = []
        for error in self._validator.iter_errors(data):
            # Descend into anyOf branches to report the most specific failure.
            detail = best_match([error])
            issues.append(SchemaIssue(message=detail.message, yaml_path=_issue_path(detail.absolute_path)))
        return sorted(issues, key=lambda issue: issue.yaml_path or "")

    def lint(self, file_path: Path, data: Any, source_map: SourceMap, result: LintResult) -> bool:
        """Lint structure of a loaded metadata document.

        Args:
            file_path: Path to the file being linted
            data: Loaded YAML document
            source_map: YAML path -> line/column map of the document
            result: LintResult to add errors/warnings to

        Returns:
            True if no structural errors were found
        """
        if isinstance(data, dict):
            for field_name, message in self.OBSOLETE_FIELDS.items():
                if field_name in data:
                    loc = lookup_source(source_map, f"/{field_name}", file_path)
                    result.add_warning_at(message, loc)

        issues = self.structural_issues(data)
        for issue in issues:
            loc = lookup_source(source_map, issue.yaml_path, file_path)
            result.add_error_at(f"{issue.message}{format_source(loc)}", loc)
        return not issues
