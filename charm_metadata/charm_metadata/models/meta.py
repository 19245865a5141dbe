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

"""Typed records for the content of a charm's metadata.yaml file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional, Tuple

from ..hooks import UNIT_HOOKS, relation_hook_names

DEFAULT_FORMAT = 1

# Storage count maximum meaning "no upper bound".
COUNT_UNBOUNDED = -1


class RelationRole(str, Enum):
    PROVIDER = "provider"
    REQUIRER = "requirer"
    PEER = "peer"


class RelationScope(str, Enum):
    GLOBAL = "global"
    CONTAINER = "container"


class StorageType(str, Enum):
    BLOCK = "block"
    FILESYSTEM = "filesystem"


def default_limit(role: RelationRole) -> Optional[int]:
    """Return the relation limit implied when a document does not give one.

    Providers are unbounded (None); requirers and peers take a single relation.
    """
    if role is RelationRole.PROVIDER:
        return None
    return 1


@dataclass(frozen=True)
class Relation:
    """A single relation declared under provides, requires or peers."""

    name: str
    role: RelationRole
    interface: str
    optional: bool = False
    limit: Optional[int] = None
    scope: RelationScope = RelationScope.GLOBAL

    def is_implicit(self) -> bool:
        """Return whether the relation is supplied by juju itself rather than by a charm."""
        return (
            self.name == "juju-info"
            and self.interface == "juju-info"
            and self.role is RelationRole.PROVIDER
        )

    def implemented_by(self, meta: "Meta") -> bool:
        """Return whether the charm described by ``meta`` implements this relation."""
        if self.is_implicit():
            return True
        rel = meta.relations_for(self.role).get(self.name)
        if rel is None or rel.interface != self.interface:
            return False
        if self.scope is RelationScope.GLOBAL:
            return rel.scope is not RelationScope.CONTAINER
        return True


@dataclass(frozen=True)
class Filesystem:
    """A filesystem Juju may create for a storage requirement."""

    type: str
    mkfs_options: Tuple[str, ...] = ()
    mount_options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Storage:
    """A charm's storage requirement.

    ``count_max`` is COUNT_UNBOUNDED when there is no upper bound.
    ``location`` and ``filesystem`` apply to filesystem storage only;
    ``filesystem`` is ordered from most to least preferred.
    """

    name: str
    type: Optional[StorageType]
    shared: bool = False
    read_only: bool = False
    persistent: bool = False
    count_min: int = 0
    count_max: int = 1
    location: str = ""
    filesystem: Tuple[Filesystem, ...] = ()


_MAPPING_FIELDS = ("provides", "requires", "peers", "storage")


@dataclass(frozen=True)
class Meta:
    """All the known content of a charm's metadata.yaml file.

    The relation and storage mappings are wrapped in read-only views on
    construction, so a Meta cannot be changed after it is built. Equality
    compares every field; the hash covers the scalar fields only, since the
    mappings themselves are not hashable.
    """

    name: str
    summary: str
    description: str
    subordinate: bool = False
    provides: Mapping[str, Relation] = field(default_factory=dict)
    requires: Mapping[str, Relation] = field(default_factory=dict)
    peers: Mapping[str, Relation] = field(default_factory=dict)
    format: int = DEFAULT_FORMAT
    old_revision: Optional[int] = None  # obsolete "revision" field
    categories: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    series: str = ""
    storage: Mapping[str, Storage] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in _MAPPING_FIELDS:
            # Copy first so the caller's dict cannot change the view either.
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def __hash__(self) -> int:
        return hash((self.name, self.summary, self.description, self.subordinate, self.format, self.series))

    def relations_for(self, role: RelationRole) -> Mapping[str, Relation]:
        if role is RelationRole.PROVIDER:
            return self.provides
        if role is RelationRole.REQUIRER:
            return self.requires
        return self.peers

    def relations(self) -> List[Relation]:
        """Return every relation, providers first, then requirers, then peers."""
        return [*self.provides.values(), *self.requires.values(), *self.peers.values()]

    def hooks(self) -> FrozenSet[str]:
        """Return the names of all hooks valid for this charm, relation hooks included."""
        names = set(UNIT_HOOKS)
        for relation_name in (*self.provides, *self.requires, *self.peers):
            names.update(relation_hook_names(relation_name))
        return frozenset(names)
