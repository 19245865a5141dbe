import pytest
import yaml
from hypothesis import given, settings
from hypothesis import strategies as st

from charm_metadata import (
    COUNT_UNBOUNDED,
    Filesystem,
    Meta,
    Relation,
    RelationRole,
    RelationScope,
    Storage,
    StorageType,
    decode_meta,
    dump_meta,
    encode_meta,
    read_meta,
)
from charm_metadata.models.parsing.encoder import encode_relation, encode_storage


def test_default_relation_collapses_to_interface():
    assert encode_relation(Relation("server", RelationRole.PROVIDER, "mysql")) == "mysql"
    assert encode_relation(Relation("db", RelationRole.REQUIRER, "mysql", limit=1)) == "mysql"
    assert encode_relation(Relation("ring", RelationRole.PEER, "riak", limit=1)) == "riak"


def test_relation_with_non_default_attributes():
    assert encode_relation(Relation("db", RelationRole.REQUIRER, "mysql", limit=None)) == {
        "interface": "mysql",
        "limit": None,
    }
    assert encode_relation(Relation("server", RelationRole.PROVIDER, "mysql", limit=1)) == {
        "interface": "mysql",
        "limit": 1,
    }
    assert encode_relation(Relation("backup", RelationRole.REQUIRER, "s3", optional=True, limit=1)) == {
        "interface": "s3",
        "optional": True,
    }
    assert encode_relation(
        Relation("logs", RelationRole.REQUIRER, "logging", limit=1, scope=RelationScope.CONTAINER)
    ) == {"interface": "logging", "scope": "container"}


@pytest.mark.parametrize(
    "count_min, count_max, expected",
    [
        (0, 1, {}),
        (1, 1, {"required": True}),
        (3, 3, {"required": True, "count": 3}),
        (0, 5, {"count": 5}),
        (2, 4, {"count": "2-4"}),
        (0, COUNT_UNBOUNDED, {"count": "0-"}),
        (5, COUNT_UNBOUNDED, {"count": "5-"}),
    ],
)
def test_storage_count_encoding(count_min, count_max, expected):
    store = Storage(name="data", type=StorageType.BLOCK, count_min=count_min, count_max=count_max)
    assert encode_storage(store) == {"type": "block", **expected}


def test_storage_filesystem_encoding():
    store = Storage(
        name="data",
        type=StorageType.FILESYSTEM,
        read_only=True,
        location="/srv/data",
        filesystem=(Filesystem("ext4"), Filesystem("xfs", mkfs_options=("-m", "0"))),
    )
    assert encode_storage(store) == {
        "type": "filesystem",
        "read-only": True,
        "location": "/srv/data",
        "filesystem": ["ext4", {"type": "xfs", "mkfs-options": ["-m", "0"]}],
    }


def test_encode_meta_omits_defaults():
    meta = Meta(name="dummy", summary="s", description="d")
    assert encode_meta(meta) == {"name": "dummy", "summary": "s", "description": "d"}


def test_encode_meta_keeps_non_default_format_and_revision():
    doc = encode_meta(Meta(name="dummy", summary="s", description="d", format=2, old_revision=3))
    assert doc["format"] == 2
    assert doc["revision"] == 3


def test_yaml_round_trip(mysql_metadata):
    meta = read_meta(mysql_metadata)
    text = dump_meta(meta)
    assert list(yaml.safe_load(text))[:3] == ["name", "summary", "description"]
    assert read_meta(text) == meta


SUBORDINATE_METADATA = """\
name: logger
summary: Ships logs
description: Forwards the principal's logs
subordinate: true
series: xenial
provides:
  juju-info: juju-info
requires:
  juju-logging:
    interface: logging
    scope: container
    limit: null
  metrics:
    interface: prometheus
    optional: true
"""


def test_subordinate_yaml_round_trip():
    meta = read_meta(SUBORDINATE_METADATA)
    assert meta.subordinate is True
    assert meta.requires["juju-logging"].limit is None

    text = dump_meta(meta)
    assert yaml.safe_load(text)["requires"]["juju-logging"] == {
        "interface": "logging",
        "limit": None,
        "scope": "container",
    }
    assert read_meta(text) == meta


_NAMES = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-", min_size=1, max_size=8)
_WORDS = st.lists(st.text(alphabet="abcxyz-", min_size=1, max_size=5), max_size=3).map(tuple)


@st.composite
def relations(draw, role, prefix):
    names = draw(st.lists(_NAMES, unique=True, max_size=3))
    result = {}
    for suffix in names:
        name = prefix + suffix
        result[name] = Relation(
            name=name,
            role=role,
            interface="i" + draw(_NAMES),
            optional=draw(st.booleans()),
            limit=draw(st.none() | st.integers(min_value=1, max_value=10)),
            scope=draw(st.sampled_from(RelationScope)),
        )
    return result


@st.composite
def storage_counts(draw):
    lo = draw(st.integers(min_value=0, max_value=5))
    hi = draw(st.sampled_from([COUNT_UNBOUNDED, max(lo, 1), max(lo, 1) + 3]))
    return lo, hi


@st.composite
def stores(draw, name):
    count_min, count_max = draw(storage_counts())
    store_type = draw(st.sampled_from(StorageType))
    is_fs = store_type is StorageType.FILESYSTEM
    return Storage(
        name=name,
        type=store_type,
        shared=draw(st.booleans()),
        read_only=draw(st.booleans()),
        persistent=draw(st.booleans()),
        count_min=count_min,
        count_max=count_max,
        location=draw(st.sampled_from(["", "/srv/data"])) if is_fs else "",
        filesystem=tuple(
            Filesystem(type=fs_type, mkfs_options=mkfs, mount_options=opts)
            for fs_type, mkfs, opts in draw(st.lists(st.tuples(_NAMES, _WORDS, _WORDS), max_size=2))
        )
        if is_fs
        else (),
    )


@st.composite
def metas(draw):
    storage_names = draw(st.lists(_NAMES, unique=True, max_size=3))
    subordinate = draw(st.booleans())
    provides = draw(relations(RelationRole.PROVIDER, "p"))
    requires = draw(relations(RelationRole.REQUIRER, "r"))
    if draw(st.booleans()):
        provides["juju-info"] = Relation("juju-info", RelationRole.PROVIDER, "juju-info")
    if subordinate:
        # Reserved names are allowed on a subordinate's container-scoped requirers.
        name = draw(st.sampled_from(["juju-container", "juju-logging"]))
        requires[name] = Relation(
            name=name,
            role=RelationRole.REQUIRER,
            interface=draw(st.sampled_from(["juju-info", "ilogging"])),
            optional=draw(st.booleans()),
            limit=draw(st.none() | st.integers(min_value=1, max_value=10)),
            scope=RelationScope.CONTAINER,
        )
    return Meta(
        name=draw(_NAMES),
        summary=draw(st.text()),
        description=draw(st.text()),
        subordinate=subordinate,
        provides=provides,
        requires=requires,
        peers=draw(relations(RelationRole.PEER, "x")),
        format=draw(st.sampled_from([1, 2])),
        old_revision=draw(st.none() | st.integers(min_value=0, max_value=100)),
        categories=draw(_WORDS),
        tags=draw(_WORDS),
        series=draw(st.sampled_from(["", "trusty", "xenial"])),
        storage={name: draw(stores(name)) for name in storage_names},
    )


@settings(max_examples=200)
@given(metas())
def test_decode_inverts_encode(meta):
    assert decode_meta(encode_meta(meta)) == meta
