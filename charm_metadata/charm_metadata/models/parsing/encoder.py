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

"""Turn metadata back into a YAML document tree.

Output uses the shortest forms that decode back to the same metadata:
relations whose attributes are all defaults become a bare interface name,
and storage counts drop whatever the decoder would fill in by itself.
The metadata is not validated here.
"""

from __future__ import annotations

from typing import Any, Dict

import yaml

from ..meta import (
    COUNT_UNBOUNDED,
    DEFAULT_FORMAT,
    Filesystem,
    Meta,
    Relation,
    RelationScope,
    Storage,
    default_limit,
)
from ..value import Value


def encode_relation(rel: Relation) -> Value:
    no_limit = default_limit(rel.role)
    if not rel.optional and rel.limit == no_limit and rel.scope is RelationScope.GLOBAL:
        return rel.interface

    encoded: Dict[str, Value] = {"interface": rel.interface}
    if rel.limit != no_limit:
        encoded["limit"] = rel.limit
    if rel.optional:
        encoded["optional"] = True
    if rel.scope is not RelationScope.GLOBAL:
        encoded["scope"] = rel.scope.value
    return encoded


def _encode_filesystem(fs: Filesystem) -> Value:
    if not fs.mkfs_options and not fs.mount_options:
        return fs.type
    encoded: Dict[str, Value] = {"type": fs.type}
    if fs.mkfs_options:
        encoded["mkfs-options"] = list(fs.mkfs_options)
    if fs.mount_options:
        encoded["options"] = list(fs.mount_options)
    return encoded


def _encode_count(store: Storage, encoded: Dict[str, Value]) -> None:
    lo, hi = store.count_min, store.count_max
    if hi == COUNT_UNBOUNDED:
        encoded["count"] = f"{lo}-"
    elif lo == 0 or lo == hi:
        # A bare maximum decodes to (0, m), or (m, m) when required.
        if lo == hi:
            encoded["required"] = True
        if hi != 1:
            encoded["count"] = hi
    else:
        encoded["count"] = f"{lo}-{hi}"


def encode_storage(store: Storage) -> Value:
    encoded: Dict[str, Value] = {}
    if store.type is not None:
        encoded["type"] = store.type.value
    if store.shared:
        encoded["shared"] = True
    if store.read_only:
        encoded["read-only"] = True
    if store.persistent:
        encoded["persistent"] = True
    _encode_count(store, encoded)
    if store.location:
        encoded["location"] = store.location
    if store.filesystem:
        encoded["filesystem"] = [_encode_filesystem(fs) for fs in store.filesystem]
    return encoded


def encode_meta(meta: Meta) -> Dict[str, Value]:
    """Return the document tree for ``meta``, omitting every defaulted field."""
    doc: Dict[str, Value] = {
        "name": meta.name,
        "summary": meta.summary,
        "description": meta.description,
    }
    for key, relations in (("provides", meta.provides), ("requires", meta.requires), ("peers", meta.peers)):
        if relations:
            doc[key] = {name: encode_relation(rel) for name, rel in relations.items()}
    if meta.categories:
        doc["categories"] = list(meta.categories)
    if meta.tags:
        doc["tags"] = list(meta.tags)
    if meta.subordinate:
        doc["subordinate"] = True
    if meta.series:
        doc["series"] = meta.series
    if meta.format != DEFAULT_FORMAT:
        doc["format"] = meta.format
    if meta.old_revision is not None:
        doc["revision"] = meta.old_revision
    if meta.storage:
        doc["storage"] = {name: encode_storage(store) for name, store in meta.storage.items()}
    return doc


def dump_meta(meta: Meta, **kwargs: Any) -> str:
    """Serialize ``meta`` as metadata.yaml text."""
    kwargs.setdefault("sort_keys", False)
    kwargs.setdefault("default_flow_style", False)
    return yaml.safe_dump(encode_meta(meta), **kwargs)
