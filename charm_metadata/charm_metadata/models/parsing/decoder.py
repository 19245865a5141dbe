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

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Type, Union
import logging

from .yaml_parser import DocumentSource, yaml_parser
from .validator import check_meta
from ..meta import (
    Filesystem,
    Meta,
    Relation,
    RelationRole,
    RelationScope,
    Storage,
    StorageType,
)
from ..metadata_schema import METADATA_SCHEMA, StorageCount
from ..value import Value
from ...exceptions import InternalError, SchemaError
from ...file_io.source_location import SourceMap, lookup_source
from ...utils.series import is_valid_series

logger = logging.getLogger(__name__)

SeriesValidator = Callable[[str], bool]

# Count used when a storage entry gives no "count" at all.
_DEFAULT_COUNT = StorageCount(minimum=None, maximum=1)


def _expect(value: Any, expected: Union[Type, Tuple[Type, ...]], what: str) -> Any:
    """Return ``value`` after checking a kind METADATA_SCHEMA already guarantees."""
    types = expected if isinstance(expected, tuple) else (expected,)
    if not isinstance(value, types) or (isinstance(value, bool) and bool not in types):
        names = " or ".join(t.__name__ for t in types)
        raise InternalError(f"decoded {what} has type {type(value).__name__}, expected {names}")
    return value


def _parse_string_list(values: Any, what: str) -> Tuple[str, ...]:
    if values is None:
        return ()
    return tuple(_expect(item, str, what) for item in _expect(values, list, what))


def _parse_relations(relations: Any, role: RelationRole) -> Dict[str, Relation]:
    if relations is None:
        return {}
    result: Dict[str, Relation] = {}
    for name, rel in _expect(relations, dict, f"{role.value} relations").items():
        what = f"relation '{name}'"
        rel = _expect(rel, dict, what)
        limit = rel["limit"]
        result[name] = Relation(
            name=name,
            role=role,
            interface=_expect(rel["interface"], str, f"{what} interface"),
            optional=_expect(rel["optional"], bool, f"{what} optional"),
            limit=None if limit is None else _expect(limit, int, f"{what} limit"),
            scope=RelationScope(_expect(rel["scope"], str, f"{what} scope")),
        )
    return result


def _resolve_count(count: StorageCount, required: bool) -> Tuple[int, int]:
    if count.minimum is not None:
        return count.minimum, count.maximum
    # The bare "m" form: a required store needs all m instances.
    return (count.maximum if required else 0), count.maximum


def _parse_filesystems(filesystems: Any, what: str) -> Tuple[Filesystem, ...]:
    if filesystems is None:
        return ()
    result = []
    for elem in _expect(filesystems, list, what):
        if isinstance(elem, str):
            result.append(Filesystem(type=elem))
            continue
        elem = _expect(elem, dict, what)
        result.append(
            Filesystem(
                type=_expect(elem["type"], str, f"{what} type"),
                mkfs_options=_parse_string_list(elem.get("mkfs-options"), f"{what} mkfs-options"),
                mount_options=_parse_string_list(elem.get("options"), f"{what} options"),
            )
        )
    return tuple(result)


def _parse_storage(stores: Any) -> Dict[str, Storage]:
    if stores is None:
        return {}
    result: Dict[str, Storage] = {}
    for name, store in _expect(stores, dict, "storage").items():
        what = f"storage '{name}'"
        store = _expect(store, dict, what)
        count = _expect(store.get("count", _DEFAULT_COUNT), StorageCount, f"{what} count")
        count_min, count_max = _resolve_count(count, _expect(store["required"], bool, f"{what} required"))
        result[name] = Storage(
            name=name,
            type=StorageType(_expect(store["type"], str, f"{what} type")),
            shared=_expect(store["shared"], bool, f"{what} shared"),
            read_only=_expect(store["read-only"], bool, f"{what} read-only"),
            persistent=_expect(store["persistent"], bool, f"{what} persistent"),
            count_min=count_min,
            count_max=count_max,
            location=_expect(store.get("location", ""), str, f"{what} location"),
            filesystem=_parse_filesystems(store.get("filesystem"), f"{what} filesystem"),
        )
    return result


def _build_meta(m: Dict[str, Any]) -> Meta:
    revision = m.get("revision")
    return Meta(
        name=_expect(m["name"], str, "name"),
        summary=_expect(m["summary"], str, "summary"),
        description=_expect(m["description"], str, "description"),
        subordinate=_expect(m.get("subordinate", False), bool, "subordinate"),
        provides=_parse_relations(m.get("provides"), RelationRole.PROVIDER),
        requires=_parse_relations(m.get("requires"), RelationRole.REQUIRER),
        peers=_parse_relations(m.get("peers"), RelationRole.PEER),
        format=_expect(m["format"], int, "format"),
        old_revision=None if revision is None else _expect(revision, int, "revision"),
        categories=_parse_string_list(m.get("categories"), "categories"),
        tags=_parse_string_list(m.get("tags"), "tags"),
        series=_expect(m.get("series", ""), str, "series"),
        storage=_parse_storage(m.get("storage")),
    )


def decode_meta(
    data: Value,
    *,
    source_map: Optional[SourceMap] = None,
    file_path: Optional[Path] = None,
    series_validator: SeriesValidator = is_valid_series,
) -> Meta:
    """Decode and validate an already-parsed metadata document.

    Args:
        data: Document tree as loaded from YAML
        source_map: Optional YAML path -> line/column map used in error messages
        file_path: Optional file the document came from, used in error messages
        series_validator: Predicate deciding whether a declared series is valid

    Returns:
        The validated metadata

    Raises:
        SchemaError: If the document does not match the metadata schema
        ValidationError: If the decoded metadata breaks a cross-field rule
    """
    try:
        coerced = METADATA_SCHEMA.coerce(data, "")
    except SchemaError as exc:
        if source_map is None and file_path is None:
            raise
        raise exc.with_source(lookup_source(source_map, exc.yaml_path, file_path)) from exc

    meta = _build_meta(coerced)
    logger.debug(
        f"Decoded metadata for charm '{meta.name}': "
        f"{len(meta.relations())} relations, {len(meta.storage)} storage entries"
    )
    check_meta(meta, series_validator=series_validator)
    return meta


def read_meta(source: DocumentSource, *, series_validator: SeriesValidator = is_valid_series) -> Meta:
    """Read the content of a metadata.yaml document and return its representation.

    ``source`` may be bytes, text, or a readable stream.
    """
    data, source_map = yaml_parser.load_document_with_source(source)
    return decode_meta(data, source_map=source_map, series_validator=series_validator)


def read_meta_file(file_path: Union[str, Path], *, series_validator: SeriesValidator = is_valid_series) -> Meta:
    """Read a metadata.yaml file from disk and return its representation."""
    path = Path(file_path)
    data, source_map = yaml_parser.load_file_with_source(path)
    return decode_meta(data, source_map=source_map, file_path=path, series_validator=series_validator)
