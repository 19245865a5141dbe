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

"""Semantic linter: decodes the document and applies the metadata rules."""

import logging
from pathlib import Path
from typing import Any, Optional

from ..exceptions import SchemaError, ValidationError
from ..file_io.source_location import SourceMap, lookup_source
from ..models.meta import Meta
from ..models.parsing.decoder import decode_meta
from .report import LintResult

logger = logging.getLogger(__name__)


class SemanticLinter:
    """Linter for cross-field rules, run once the structure is known to be sound."""

    def lint(self, file_path: Path, data: Any, source_map: SourceMap, result: LintResult) -> Optional[Meta]:
        """Decode the document, recording the first schema or validation error.

        Returns:
            The decoded metadata, or None if decoding failed
        """
        try:
            meta = decode_meta(data, source_map=source_map, file_path=file_path)
        except SchemaError as exc:
            loc = exc.source or lookup_source(source_map, exc.yaml_path, file_path)
            result.add_error_at(str(exc), loc)
            return None
        except ValidationError as exc:
            result.add_error(str(exc))
            return None

        logger.debug(f"{file_path}: charm '{meta.name}' is valid")
        return meta
