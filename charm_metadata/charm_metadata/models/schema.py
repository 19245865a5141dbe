from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ..exceptions import SchemaError
from .value import ValueKind, describe, kind_of


JsonPointer = str


class _Omit:
    """Default marker: leave the field out of the output when the input omits it."""

    def __repr__(self) -> str:
        return "OMIT"


class _Required:
    def __repr__(self) -> str:
        return "REQUIRED"


OMIT = _Omit()
REQUIRED = _Required()


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def join_path(base: Optional[JsonPointer], token: Any) -> JsonPointer:
    if not base:
        return f"/{_jp_escape(str(token))}"
    return f"{base}/{_jp_escape(str(token))}"


class Checker(ABC):
    """A validator/coercer for one node of an untyped document tree.

    Checkers are immutable and never modify the value they are given, so a
    single schema instance can be shared by any number of decode calls.
    """

    @abstractmethod
    def coerce(self, value: Any, path: JsonPointer) -> Any:
        """Return the coerced value or raise SchemaError naming ``path``."""

    @abstractmethod
    def json_schema(self) -> Dict[str, Any]:
        """Describe the accepted shape as a JSON Schema fragment."""


_TYPE_KINDS = {
    bool: ValueKind.BOOL,
    int: ValueKind.INT,
    str: ValueKind.STRING,
}

_JSON_TYPES = {
    bool: "boolean",
    int: "integer",
    str: "string",
}


@dataclass(frozen=True)
class TypeSpec(Checker):
    types: Tuple[type, ...]

    def _accepts(self, value: Any) -> bool:
        kind = kind_of(value)
        return any(_TYPE_KINDS.get(t) is kind for t in self.types)

    def expected(self) -> str:
        return " or ".join(_TYPE_KINDS[t].value for t in self.types)

    def coerce(self, value: Any, path: JsonPointer) -> Any:
        if not self._accepts(value):
            raise SchemaError(f"expected {self.expected()}, got {describe(value)}", path)
        return value

    def json_schema(self) -> Dict[str, Any]:
        json_types = [_JSON_TYPES[t] for t in self.types]
        return {"type": json_types[0] if len(json_types) == 1 else json_types}


@dataclass(frozen=True)
class ConstSpec(Checker):
    value: Any

    def coerce(self, value: Any, path: JsonPointer) -> Any:
        if kind_of(value) is kind_of(self.value) and value == self.value:
            return value
        expected = f'"{self.value}"' if isinstance(self.value, str) else repr(self.value)
        raise SchemaError(f"expected {expected}, got {describe(value)}", path)

    def json_schema(self) -> Dict[str, Any]:
        return {"const": self.value}


@dataclass(frozen=True)
class UnionSpec(Checker):
    options: Tuple[Checker, ...]

    def coerce(self, value: Any, path: JsonPointer) -> Any:
        # Options are tried in order; the last failure is the one reported.
        error: Optional[SchemaError] = None
        for option in self.options:
            try:
                return option.coerce(value, path)
            except SchemaError as exc:
                error = exc
        if error is None:
            raise SchemaError("no schema options to match against", path)
        raise error

    def json_schema(self) -> Dict[str, Any]:
        return {"anyOf": [option.json_schema() for option in self.options]}


@dataclass(frozen=True)
class ListSpec(Checker):
    item: Checker

    def coerce(self, value: Any, path: JsonPointer) -> Any:
        if kind_of(value) is not ValueKind.LIST:
            raise SchemaError(f"expected list, got {describe(value)}", path)
        return [self.item.coerce(elem, join_path(path, idx)) for idx, elem in enumerate(value)]

    def json_schema(self) -> Dict[str, Any]:
        return {"type": "array", "items": self.item.json_schema()}


def _check_map(value: Any, path: JsonPointer) -> Dict[str, Any]:
    if kind_of(value) is not ValueKind.MAP:
        raise SchemaError(f"expected map, got {describe(value)}", path)
    for key in value:
        if not isinstance(key, str):
            raise SchemaError(f"expected string key, got {describe(key)}", path)
    return value


@dataclass(frozen=True)
class MapSpec(Checker):
    """A map with arbitrary string keys whose values all match ``value``."""

    value: Checker

    def coerce(self, value: Any, path: JsonPointer) -> Any:
        mapping = _check_map(value, path)
        return {key: self.value.coerce(item, join_path(path, key)) for key, item in mapping.items()}

    def json_schema(self) -> Dict[str, Any]:
        return {"type": "object", "additionalProperties": self.value.json_schema()}


@dataclass(frozen=True)
class FieldSpec:
    spec: Checker
    default: Any = REQUIRED

    @property
    def required(self) -> bool:
        return self.default is REQUIRED


@dataclass(frozen=True)
class ObjectSpec(Checker):
    """A map with a fixed set of known keys.

    Absent fields take their default, are left out when the default is
    ``OMIT``, and are checked as ``None`` when required so the field's
    checker reports what it expected. Unknown keys are an error.
    """

    fields: Mapping[str, FieldSpec]

    def coerce(self, value: Any, path: JsonPointer) -> Any:
        mapping = _check_map(value, path)
        result: Dict[str, Any] = {}
        for name, field_spec in self.fields.items():
            if name in mapping:
                raw = mapping[name]
            elif field_spec.default is OMIT:
                continue
            elif field_spec.required:
                raw = None
            else:
                raw = field_spec.default
            result[name] = field_spec.spec.coerce(raw, join_path(path, name))
        for key in mapping:
            if key not in self.fields:
                raise SchemaError(f"unknown field '{key}'", join_path(path, key))
        return result

    def json_schema(self) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        for name, field_spec in self.fields.items():
            prop = field_spec.spec.json_schema()
            if not field_spec.required and field_spec.default is not OMIT:
                prop = {**prop, "default": field_spec.default}
            properties[name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [name for name, field_spec in self.fields.items() if field_spec.required],
            "additionalProperties": False,
        }


STRING = TypeSpec((str,))
BOOL = TypeSpec((bool,))
INT = TypeSpec((int,))
