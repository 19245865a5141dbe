"""Positions of document nodes, for error messages and lint reports."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict, Optional


# JSON pointer -> {"line": n, "column": n}, both 1-based.
SourceMap = Dict[str, Dict[str, int]]

SOURCE_ROOT_ENV = "CHARM_METADATA_SOURCE_ROOT"


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based

    def position(self) -> str:
        """Return ``line:column``, ``line``, or an empty string."""
        if self.line is None:
            return ""
        if self.column is None:
            return str(self.line)
        return f"{self.line}:{self.column}"


def lookup_source(
    source_map: Optional[SourceMap],
    yaml_path: Optional[str],
    file_path: Optional[Path] = None,
) -> SourceLocation:
    """Find the position of ``yaml_path``; unknown paths keep only the path itself."""
    entry = source_map.get(yaml_path) if source_map and yaml_path is not None else None
    if not entry:
        return SourceLocation(file_path=file_path, yaml_path=yaml_path)
    return SourceLocation(
        file_path=file_path,
        yaml_path=yaml_path,
        line=entry.get("line"),
        column=entry.get("column"),
    )


def _report_root(path: Path) -> Optional[Path]:
    env_root = os.environ.get(SOURCE_ROOT_ENV)
    if env_root:
        return Path(env_root)

    # charms/<name>/metadata.yaml is reported from "charms" on.
    parts = path.parts
    if "charms" in parts:
        idx = parts.index("charms")
        if idx > 0:
            return Path(*parts[:idx])
    return None


def display_path(path: Path) -> str:
    root = _report_root(path)
    if root is None:
        return str(path)
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def format_source(loc: Optional[SourceLocation]) -> str:
    """Render ``loc`` as a message suffix such as `` (source= charms/x/metadata.yaml:4:9 yaml_path=/format)``."""
    if loc is None:
        return ""

    parts = []
    position = loc.position()
    if loc.file_path is not None:
        target = display_path(loc.file_path)
        parts.append(f"source= {target}:{position}" if position else f"source= {target}")
    elif loc.line is not None:
        parts.append(f"line {loc.line}" if loc.column is None else f"line {loc.line}, column {loc.column}")

    if loc.yaml_path:
        parts.append(f"yaml_path={loc.yaml_path}")

    return " (" + " ".join(parts) + ")" if parts else ""
