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

"""Untyped document values as produced by the YAML loader.

A document tree is built only from ``None``, ``bool``, ``int``, ``str``,
lists and string-keyed dicts. Anything else the loader may hand back
(floats, timestamps, binary) is outside the model and is rejected by every
checker that inspects it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

Value = Union[None, bool, int, str, List["Value"], Dict[str, "Value"]]


class ValueKind(str, Enum):
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    STRING = "string"
    LIST = "list"
    MAP = "map"


# bool must be tested before int: bool is a subclass of int.
_KIND_ORDER = (
    (bool, ValueKind.BOOL),
    (int, ValueKind.INT),
    (str, ValueKind.STRING),
    (list, ValueKind.LIST),
    (dict, ValueKind.MAP),
)


def kind_of(value: Any) -> Optional[ValueKind]:
    """Return the kind of a document value, or None if it is outside the model."""
    if value is None:
        return ValueKind.NULL
    for python_type, kind in _KIND_ORDER:
        if isinstance(value, python_type):
            return kind
    return None


def describe(value: Any) -> str:
    """Render a value for use in an error message."""
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return "nothing"
    if kind is ValueKind.STRING:
        return f'string("{value}")'
    if kind in (ValueKind.LIST, ValueKind.MAP):
        return kind.value
    if kind is None:
        return f"{type(value).__name__}({value!r})"
    return f"{kind.value}({value!r})"
