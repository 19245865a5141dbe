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

from __future__ import annotations

from typing import Callable, Mapping, Set

from ..meta import Meta, Relation, RelationRole, RelationScope, StorageType
from ...exceptions import ValidationError
from ...utils.series import is_valid_series


def reserved_name(name: str) -> bool:
    return name == "juju" or name.startswith("juju-")


class MetaValidator:
    """Checks the cross-field rules of decoded metadata.

    Rules are applied in a fixed order and the first broken rule raises.
    The metadata is only inspected, never modified.
    """

    def __init__(self, series_validator: Callable[[str], bool] = is_valid_series):
        self.series_validator = series_validator

    def validate_relations(self, meta: Meta) -> None:
        """Check relation names, roles and interfaces across provides, requires and peers."""
        names: Set[str] = set()
        for role in (RelationRole.PROVIDER, RelationRole.REQUIRER, RelationRole.PEER):
            self._validate_relation_map(meta, meta.relations_for(role), role, names)

    def _validate_relation_map(
        self, meta: Meta, relations: Mapping[str, Relation], role: RelationRole, names: Set[str]
    ) -> None:
        for name, rel in relations.items():
            if rel.name != name:
                raise ValidationError(
                    f"charm '{meta.name}' has mismatched relation name '{rel.name}'; expected '{name}'"
                )
            if rel.role is not role:
                raise ValidationError(
                    f"charm '{meta.name}' has mismatched role '{rel.role.value}'; expected '{role.value}'"
                )
            if not rel.is_implicit():
                # Container-scoped requirers of a subordinate may use the reserved juju-* names.
                container_requirer = (
                    meta.subordinate and role is RelationRole.REQUIRER and rel.scope is RelationScope.CONTAINER
                )
                if not container_requirer and reserved_name(name):
                    raise ValidationError(f"charm '{meta.name}' using a reserved relation name: '{name}'")
                if role is not RelationRole.REQUIRER and reserved_name(rel.interface):
                    raise ValidationError(
                        f"charm '{meta.name}' relation '{name}' using a reserved interface: '{rel.interface}'"
                    )
            if name in names:
                raise ValidationError(f"charm '{meta.name}' using a duplicated relation name: '{name}'")
            names.add(name)

    def validate_subordinate(self, meta: Meta) -> None:
        """A subordinate needs a container-scoped requirer to relate to its principal."""
        if not meta.subordinate:
            return
        if not any(rel.scope is RelationScope.CONTAINER for rel in meta.requires.values()):
            raise ValidationError(
                f"subordinate charm '{meta.name}' lacks \"requires\" relation with container scope"
            )

    def validate_series(self, meta: Meta) -> None:
        if meta.series and not self.series_validator(meta.series):
            raise ValidationError(f"charm '{meta.name}' declares invalid series: '{meta.series}'")

    def validate_storage(self, meta: Meta) -> None:
        # Keys are unique, so a name that must equal its key is unique too.
        for key, store in meta.storage.items():
            prefix = f"charm '{meta.name}' storage '{key}'"
            if store.name != key:
                raise ValidationError(f"{prefix}: mismatched storage name '{store.name}'")
            type_name = store.type.value if store.type is not None else ""
            if store.location and store.type is not StorageType.FILESYSTEM:
                raise ValidationError(f'{prefix}: location may not be specified for "type: {type_name}"')
            if store.filesystem and store.type is not StorageType.FILESYSTEM:
                raise ValidationError(f'{prefix}: filesystem may not be specified for "type: {type_name}"')
            if store.type is None:
                raise ValidationError(f"{prefix}: type must be specified")
            if store.count_min < 0:
                raise ValidationError(f"{prefix}: invalid minimum count {store.count_min}")
            if store.count_max == 0 or store.count_max < -1:
                raise ValidationError(f"{prefix}: invalid maximum count {store.count_max}")

    def validate_all(self, meta: Meta) -> None:
        """Perform complete validation."""
        self.validate_relations(meta)
        self.validate_subordinate(meta)
        self.validate_series(meta)
        self.validate_storage(meta)


def check_meta(meta: Meta, *, series_validator: Callable[[str], bool] = is_valid_series) -> None:
    """Check that the metadata is well-formed.

    Raises:
        ValidationError: Describing the first broken rule
    """
    MetaValidator(series_validator).validate_all(meta)
