"""File I/O related utilities.

This package groups small modules that deal with file-backed diagnostics.
"""

from .source_location import SourceLocation, SourceMap, lookup_source, format_source

__all__ = [
    "SourceLocation",
    "SourceMap",
    "lookup_source",
    "format_source",
]
