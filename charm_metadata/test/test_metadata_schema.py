import copy

import pytest
from jsonschema import Draft7Validator

from charm_metadata.exceptions import SchemaError
from charm_metadata.models.metadata_schema import (
    METADATA_SCHEMA,
    RelationSpec,
    StorageCount,
    StorageCountSpec,
    metadata_json_schema,
)


def test_relation_shorthand_expands_to_full_form():
    assert RelationSpec(None).coerce("mysql", "/provides/server") == {
        "interface": "mysql",
        "limit": None,
        "optional": False,
        "scope": "global",
    }
    assert RelationSpec(1).coerce("http", "/requires/website")["limit"] == 1


def test_relation_map_fills_role_default_limit():
    assert RelationSpec(1).coerce({"interface": "http"}, "/requires/website") == {
        "interface": "http",
        "limit": 1,
        "optional": False,
        "scope": "global",
    }
    explicit = RelationSpec(1).coerce({"interface": "http", "limit": None, "scope": "container"}, "")
    assert explicit["limit"] is None
    assert explicit["scope"] == "container"


def test_relation_map_is_not_modified():
    value = {"interface": "http"}
    RelationSpec(1).coerce(value, "")
    assert value == {"interface": "http"}


def test_relation_map_field_errors_name_the_field():
    with pytest.raises(SchemaError) as exc:
        RelationSpec(1).coerce({"interface": "http", "scope": "machine"}, "/requires/website")
    assert exc.value.yaml_path == "/requires/website/scope"

    with pytest.raises(SchemaError) as exc:
        RelationSpec(1).coerce({"limit": 2}, "/requires/website")
    assert exc.value.yaml_path == "/requires/website/interface"


def test_relation_rejects_other_shapes():
    with pytest.raises(SchemaError) as exc:
        RelationSpec(None).coerce(5, "/provides/server")
    assert exc.value.message == "expected interface name or relation map, got int(5)"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2-4", StorageCount(minimum=2, maximum=4)),
        ("5-", StorageCount(minimum=5, maximum=-1)),
        ("0-1", StorageCount(minimum=0, maximum=1)),
        (5, StorageCount(minimum=None, maximum=5)),
    ],
)
def test_storage_count_forms(raw, expected):
    assert StorageCountSpec().coerce(raw, "/storage/data/count") == expected


@pytest.mark.parametrize("raw", [0, -3])
def test_storage_count_rejects_non_positive_integer(raw):
    with pytest.raises(SchemaError) as exc:
        StorageCountSpec().coerce(raw, "/storage/data/count")
    assert exc.value.message == f"invalid count {raw}"
    assert exc.value.yaml_path == "/storage/data/count"


@pytest.mark.parametrize("raw", ["abc", "-3", "2-4-", "3", " 2-4"])
def test_storage_count_rejects_malformed_strings(raw):
    with pytest.raises(SchemaError) as exc:
        StorageCountSpec().coerce(raw, "/storage/data/count")
    assert f'"{raw}"' in exc.value.message
    assert "/storage/data/count" in str(exc.value)


def test_storage_count_rejects_bool():
    with pytest.raises(SchemaError):
        StorageCountSpec().coerce(True, "/storage/data/count")


def test_metadata_schema_output(base_doc):
    coerced = METADATA_SCHEMA.coerce(base_doc, "")
    assert coerced == {**base_doc, "format": 1}


def test_metadata_schema_input_is_untouched(base_doc, mysql_metadata):
    doc = {**base_doc, "provides": {"server": "mysql"}, "storage": {"data": {"type": "block"}}}
    original = copy.deepcopy(doc)
    METADATA_SCHEMA.coerce(doc, "")
    METADATA_SCHEMA.coerce(doc, "")
    assert doc == original


def test_json_schema_agrees_on_documents(base_doc):
    validator = Draft7Validator(metadata_json_schema())
    Draft7Validator.check_schema(metadata_json_schema())

    good = {
        **base_doc,
        "provides": {"server": "mysql", "admin": {"interface": "http", "limit": None}},
        "storage": {"data": {"type": "filesystem", "count": "1-", "filesystem": ["ext4"]}},
    }
    assert validator.is_valid(good)

    assert not validator.is_valid({**base_doc, "storage": {"data": {"type": "block", "count": 0}}})
    assert not validator.is_valid({**base_doc, "storage": {"data": {"type": "tape"}}})
    assert not validator.is_valid({**base_doc, "subordinate": "yes"})
    assert not validator.is_valid({**base_doc, "colour": "red"})
    assert not validator.is_valid({"name": "x"})
