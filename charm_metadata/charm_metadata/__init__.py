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

"""Decoding, validation and encoding of charm metadata.yaml documents."""

__version__ = "0.1.0"

from .exceptions import DocumentError, InternalError, MetadataError, SchemaError, ValidationError
from .models.meta import (
    COUNT_UNBOUNDED,
    DEFAULT_FORMAT,
    Filesystem,
    Meta,
    Relation,
    RelationRole,
    RelationScope,
    Storage,
    StorageType,
)
from .models.parsing.decoder import decode_meta, read_meta, read_meta_file
from .models.parsing.encoder import dump_meta, encode_meta
from .models.parsing.validator import check_meta

__all__ = [
    "COUNT_UNBOUNDED",
    "DEFAULT_FORMAT",
    "DocumentError",
    "Filesystem",
    "InternalError",
    "Meta",
    "MetadataError",
    "Relation",
    "RelationRole",
    "RelationScope",
    "SchemaError",
    "Storage",
    "StorageType",
    "ValidationError",
    "check_meta",
    "decode_meta",
    "dump_meta",
    "encode_meta",
    "read_meta",
    "read_meta_file",
]
