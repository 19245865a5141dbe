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

"""Custom exceptions for charm metadata decoding."""

from typing import Optional

from .file_io.source_location import SourceLocation, format_source


class MetadataError(Exception):
    """Base exception for errors caused by a metadata document."""
    pass


class DocumentError(MetadataError):
    """Exception raised when the raw document cannot be read or parsed."""
    pass


class SchemaError(MetadataError):
    """Exception raised when a document does not match the metadata schema.

    Attributes:
        message: Description of the mismatch, without location.
        yaml_path: JSON-pointer-like path of the offending node ("" is the root).
        source: Optional line/column of the offending node.
    """

    def __init__(self, message: str, yaml_path: str = "", source: Optional[SourceLocation] = None):
        self.message = message
        self.yaml_path = yaml_path
        self.source = source
        super().__init__(message)

    def with_source(self, source: Optional[SourceLocation]) -> "SchemaError":
        """Return a copy of this error carrying the given source location."""
        return SchemaError(self.message, yaml_path=self.yaml_path, source=source)

    def __str__(self) -> str:
        loc = self.source if self.source is not None else SourceLocation(yaml_path=self.yaml_path)
        return f"metadata: {self.message}{format_source(loc)}"


class ValidationError(MetadataError):
    """Exception raised when decoded metadata violates a cross-field rule."""
    pass


class InternalError(Exception):
    """Exception raised when the decoder finds a value the schema should have ruled out.

    This is a defect in the decoder, not in the document, so it is
    intentionally not a MetadataError.
    """
    pass
