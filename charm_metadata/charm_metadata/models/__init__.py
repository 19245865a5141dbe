"""Metadata records, the document value model and the schemas that check it.

Schema modules intentionally avoid depending on the parsing modules so the
document shape can be inspected (e.g. by the linter) without decoding.
"""

from .meta import (
    COUNT_UNBOUNDED,
    DEFAULT_FORMAT,
    Filesystem,
    Meta,
    Relation,
    RelationRole,
    RelationScope,
    Storage,
    StorageType,
)
from .schema import SchemaIssue
from .metadata_schema import METADATA_SCHEMA, metadata_json_schema
