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

"""File naming linter for charm metadata files."""

from pathlib import Path

from .report import LintResult


class FileLinter:
    """Linter for file naming conventions."""

    EXPECTED_NAME = 'metadata.yaml'

    def lint(self, file_path: Path, result: LintResult):
        """Lint file naming conventions.

        Args:
            file_path: Path to the file to lint
            result: LintResult to add errors/warnings to
        """
        if file_path.name == self.EXPECTED_NAME:
            return

        if file_path.name == 'metadata.yml':
            result.add_warning(
                f"File should use the '.yaml' extension: rename to '{self.EXPECTED_NAME}'"
            )
            return

        result.add_warning(
            f"File '{file_path.name}' will not be picked up as charm metadata; "
            f"expected '{self.EXPECTED_NAME}'"
        )
