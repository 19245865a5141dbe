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

"""YAML document loader with source positions and optional file caching."""

import yaml
import logging
import threading
from pathlib import Path
from typing import Dict, IO, Optional, Tuple, Union

from ...config import metadata_config
from ...exceptions import DocumentError
from ...file_io.source_location import SourceMap
from ..value import Value

logger = logging.getLogger(__name__)

DocumentSource = Union[bytes, str, IO[bytes], IO[str]]

# (st_mtime_ns, st_size) of the file a cache entry was loaded from.
FileStamp = Tuple[int, int]


class YamlParser:
    """YAML parser with caching and source maps.

    Cached files are reloaded as soon as their modification time or size
    changes, so an edited file is never served from the cache.
    """

    def __init__(self, cache_enabled: Optional[bool] = None, max_cache_size: Optional[int] = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to cache loaded files. If None, uses global config.
            max_cache_size: Maximum number of cached files. If None, uses global config.
                A size of 0 or less disables the cache.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else metadata_config.cache_enabled
        self.max_cache_size = max_cache_size if max_cache_size is not None else metadata_config.max_cache_size
        self._cache: Dict[Path, Tuple[FileStamp, Tuple[Value, SourceMap]]] = {}
        self._lock = threading.Lock()

    @property
    def caching(self) -> bool:
        return self.cache_enabled and self.max_cache_size > 0

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map_from_yaml(cls, content: str) -> SourceMap:
        """Build a mapping from YAML JSON-pointer-like paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by safe_load.
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, f"{path}/{cls._json_pointer_escape(str(key))}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    @staticmethod
    def _read_text(source: DocumentSource) -> str:
        if hasattr(source, "read"):
            source = source.read()
        if isinstance(source, bytes):
            try:
                return source.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DocumentError(f"metadata is not valid UTF-8: {exc}") from exc
        if not isinstance(source, str):
            raise DocumentError(f"cannot read metadata from {type(source).__name__}")
        return source

    def load_document(self, source: DocumentSource) -> Value:
        """Load a YAML document from bytes, text or a readable stream.

        An empty document loads as an empty mapping.

        Raises:
            DocumentError: If the content is not valid YAML
        """
        content = self._read_text(source)
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise DocumentError(f"Failed to parse YAML content: {exc}") from exc
        return {} if data is None else data

    def load_document_with_source(self, source: DocumentSource) -> Tuple[Value, SourceMap]:
        """Load a YAML document and return (data, source_map).

        source_map keys are JSON-pointer-like YAML paths (e.g. "/storage/data/count").
        Values contain 1-based line/column.
        """
        content = self._read_text(source)
        data = self.load_document(content)
        return data, self._build_source_map_from_yaml(content)

    def load_file_with_source(self, file_path: Union[str, Path]) -> Tuple[Value, SourceMap]:
        """Load a YAML file and return (data, source_map).

        Raises:
            DocumentError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.is_file():
            raise DocumentError(f"Metadata file not found: {path}")

        try:
            # Stat before reading: a write racing the read then shows up as a stale stamp.
            stat = path.stat()
            stamp: FileStamp = (stat.st_mtime_ns, stat.st_size)
        except OSError as exc:
            raise DocumentError(f"Failed to read metadata file {path}: {exc}") from exc

        if self.caching:
            with self._lock:
                cached = self._cache.get(path)
            if cached is not None and cached[0] == stamp:
                logger.debug(f"Loading metadata from cache: {path}")
                return cached[1]

        logger.debug(f"Loading metadata file: {path}")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise DocumentError(f"Failed to read metadata file {path}: {exc}") from exc

        try:
            loaded = self.load_document_with_source(content)
        except DocumentError as exc:
            raise DocumentError(f"{path}: {exc}") from exc

        if self.caching:
            with self._lock:
                self._cache.pop(path, None)
                while len(self._cache) >= self.max_cache_size:
                    # Evict the oldest entry; dicts keep insertion order.
                    self._cache.pop(next(iter(self._cache)))
                self._cache[path] = (stamp, loaded)
        return loaded

    def clear_cache(self):
        """Clear the file cache."""
        with self._lock:
            self._cache.clear()
        logger.debug("Metadata cache cleared")


# Global parser instance
yaml_parser = YamlParser()
