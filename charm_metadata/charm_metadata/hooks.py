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

"""Names of the hooks a charm may implement."""

from typing import Tuple

UNIT_HOOKS: Tuple[str, ...] = (
    "install",
    "start",
    "config-changed",
    "upgrade-charm",
    "stop",
    "collect-metrics",
    "meter-status-changed",
)

# Relation hooks are prefixed with the relation name: "<relation>-joined".
RELATION_HOOKS: Tuple[str, ...] = (
    "joined",
    "changed",
    "departed",
    "broken",
)


def relation_hook_names(relation_name: str) -> Tuple[str, ...]:
    return tuple(f"{relation_name}-{hook}" for hook in RELATION_HOOKS)
