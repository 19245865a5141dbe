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

"""Schema of the metadata.yaml document.

Everything here is built once at import time and never modified afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..exceptions import SchemaError
from .meta import DEFAULT_FORMAT, COUNT_UNBOUNDED, RelationRole, RelationScope, StorageType, default_limit
from .schema import (
    BOOL,
    INT,
    OMIT,
    STRING,
    Checker,
    ConstSpec,
    FieldSpec,
    JsonPointer,
    ListSpec,
    MapSpec,
    ObjectSpec,
    UnionSpec,
)
from .value import ValueKind, describe, kind_of


RELATION_SCHEMA = ObjectSpec(
    fields={
        "interface": FieldSpec(STRING),
        "limit": FieldSpec(UnionSpec((ConstSpec(None), INT))),
        "scope": FieldSpec(
            UnionSpec((ConstSpec(RelationScope.GLOBAL.value), ConstSpec(RelationScope.CONTAINER.value))),
            default=RelationScope.GLOBAL.value,
        ),
        "optional": FieldSpec(BOOL, default=False),
    }
)


@dataclass(frozen=True)
class RelationSpec(Checker):
    """Expands the interface shorthand of a relation into its full map form.

    Both of these are accepted::

        provides:
          server: mysql
          admin:
            interface: http
            limit: 2

    and in either case the output is the full map, with ``limit`` taken from
    ``default_limit`` when the document does not give one.
    """

    default_limit: Optional[int]

    def coerce(self, value: Any, path: JsonPointer) -> Any:
        kind = kind_of(value)
        if kind is ValueKind.STRING:
            return {
                "interface": value,
                "limit": self.default_limit,
                "optional": False,
                "scope": RelationScope.GLOBAL.value,
            }
        if kind is ValueKind.MAP:
            expanded = dict(value)
            expanded.setdefault("limit", self.default_limit)
            return RELATION_SCHEMA.coerce(expanded, path)
        raise SchemaError(f"expected interface name or relation map, got {describe(value)}", path)

    def json_schema(self) -> Dict[str, Any]:
        full = RELATION_SCHEMA.json_schema()
        return {
            "anyOf": [
                {"type": "string"},
                {**full, "required": [name for name in full["required"] if name != "limit"]},
            ]
        }


@dataclass(frozen=True)
class StorageCount:
    """A storage instance count range.

    ``minimum`` is None for the bare ``m`` form, whose minimum depends on
    whether the storage is required and is resolved by the decoder.
    """

    minimum: Optional[int]
    maximum: int


_COUNT_RE = re.compile(r"([0-9]+)-([0-9]*)")


@dataclass(frozen=True)
class StorageCountSpec(Checker):
    """Parses a storage count given as ``m``, ``m-n`` or ``m-``."""

    def coerce(self, value: Any, path: JsonPointer) -> Any:
        kind = kind_of(value)
        if kind is ValueKind.INT:
            if value <= 0:
                raise SchemaError(f"invalid count {value}", path)
            return StorageCount(minimum=None, maximum=value)
        if kind is not ValueKind.STRING:
            raise SchemaError(f"expected int or string, got {describe(value)}", path)

        match = _COUNT_RE.fullmatch(value)
        if match is None:
            raise SchemaError(f"value \"{value}\" does not match 'm', 'm-n', or 'm-'", path)
        minimum = int(match.group(1))
        maximum = int(match.group(2)) if match.group(2) else COUNT_UNBOUNDED
        return StorageCount(minimum=minimum, maximum=maximum)

    def json_schema(self) -> Dict[str, Any]:
        return {
            "anyOf": [
                {"type": "integer", "minimum": 1},
                {"type": "string", "pattern": "^[0-9]+-[0-9]*$"},
            ]
        }


FILESYSTEM_SCHEMA = ObjectSpec(
    fields={
        "type": FieldSpec(STRING),
        "mkfs-options": FieldSpec(ListSpec(STRING), default=OMIT),
        "options": FieldSpec(ListSpec(STRING), default=OMIT),
    }
)

STORAGE_SCHEMA = ObjectSpec(
    fields={
        "type": FieldSpec(UnionSpec((ConstSpec(StorageType.BLOCK.value), ConstSpec(StorageType.FILESYSTEM.value)))),
        "required": FieldSpec(BOOL, default=False),
        "shared": FieldSpec(BOOL, default=False),
        "read-only": FieldSpec(BOOL, default=False),
        "persistent": FieldSpec(BOOL, default=False),
        "count": FieldSpec(StorageCountSpec(), default=OMIT),
        "location": FieldSpec(STRING, default=OMIT),
        "filesystem": FieldSpec(ListSpec(UnionSpec((STRING, FILESYSTEM_SCHEMA))), default=OMIT),
    }
)

METADATA_SCHEMA = ObjectSpec(
    fields={
        "name": FieldSpec(STRING),
        "summary": FieldSpec(STRING),
        "description": FieldSpec(STRING),
        "provides": FieldSpec(MapSpec(RelationSpec(default_limit(RelationRole.PROVIDER))), default=OMIT),
        "requires": FieldSpec(MapSpec(RelationSpec(default_limit(RelationRole.REQUIRER))), default=OMIT),
        "peers": FieldSpec(MapSpec(RelationSpec(default_limit(RelationRole.PEER))), default=OMIT),
        "revision": FieldSpec(INT, default=OMIT),  # obsolete
        "format": FieldSpec(INT, default=DEFAULT_FORMAT),
        "subordinate": FieldSpec(BOOL, default=OMIT),
        "categories": FieldSpec(ListSpec(STRING), default=OMIT),
        "tags": FieldSpec(ListSpec(STRING), default=OMIT),
        "series": FieldSpec(STRING, default=OMIT),
        "storage": FieldSpec(MapSpec(STORAGE_SCHEMA), default=OMIT),
    }
)


def metadata_json_schema() -> Dict[str, Any]:
    """Return METADATA_SCHEMA as a Draft 7 JSON Schema document."""
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "charm metadata",
        **METADATA_SCHEMA.json_schema(),
    }
