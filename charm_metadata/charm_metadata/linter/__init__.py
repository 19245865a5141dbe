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

"""Linter package for charm metadata files."""

from pathlib import Path
from typing import List

from ..exceptions import DocumentError
from ..models.parsing.yaml_parser import yaml_parser
from .report import LintResult
from .structure_linter import StructureLinter
from .semantic_linter import SemanticLinter
from .file_linter import FileLinter

__all__ = ['lint_files', 'LintResult']


def lint_files(file_paths: List[Path]) -> List[LintResult]:
    """Lint a list of metadata files.

    Args:
        file_paths: List of file paths to lint

    Returns:
        List of LintResult objects, one per file
    """
    results = []

    file_linter = FileLinter()
    structure_linter = StructureLinter()
    semantic_linter = SemanticLinter()

    for file_path in file_paths:
        result = LintResult(file_path)
        results.append(result)

        file_linter.lint(file_path, result)
        try:
            data, source_map = yaml_parser.load_file_with_source(file_path)
        except DocumentError as e:
            result.add_error(f"Failed to load YAML file: {e}")
            continue

        if structure_linter.lint(file_path, data, source_map, result):
            semantic_linter.lint(file_path, data, source_map, result)

    return results
