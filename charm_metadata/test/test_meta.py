import logging

import pytest

from charm_metadata import Meta, Relation, RelationRole, RelationScope, read_meta
from charm_metadata.hooks import UNIT_HOOKS
from charm_metadata.models.value import ValueKind, describe, kind_of
from charm_metadata.utils.logging_utils import configure_split_stream_logging, level_for_verbosity


def test_hooks_include_unit_and_relation_hooks(mysql_metadata):
    hooks = read_meta(mysql_metadata).hooks()
    assert set(UNIT_HOOKS) <= hooks
    for relation in ("server", "backup", "cluster"):
        for hook in ("joined", "changed", "departed", "broken"):
            assert f"{relation}-{hook}" in hooks
    assert len(hooks) == len(UNIT_HOOKS) + 12


def test_relations_are_listed_by_role(mysql_metadata):
    meta = read_meta(mysql_metadata)
    assert [rel.name for rel in meta.relations()] == ["server", "backup", "cluster"]


def test_implemented_by():
    logging_rel = Relation("logs", RelationRole.REQUIRER, "logging", limit=1, scope=RelationScope.CONTAINER)
    meta = Meta(
        name="dummy",
        summary="s",
        description="d",
        provides={"website": Relation("website", RelationRole.PROVIDER, "http")},
        requires={"logs": logging_rel},
    )

    assert Relation("website", RelationRole.PROVIDER, "http").implemented_by(meta)
    assert not Relation("website", RelationRole.PROVIDER, "https").implemented_by(meta)
    assert not Relation("website", RelationRole.REQUIRER, "http").implemented_by(meta)
    assert not Relation("missing", RelationRole.PROVIDER, "http").implemented_by(meta)

    assert logging_rel.implemented_by(meta)
    # A global relation cannot be served by a container-scoped one.
    assert not Relation("logs", RelationRole.REQUIRER, "logging").implemented_by(meta)

    implicit = Relation("juju-info", RelationRole.PROVIDER, "juju-info")
    assert implicit.implemented_by(meta)


@pytest.mark.parametrize(
    "value, kind, text",
    [
        (None, ValueKind.NULL, "nothing"),
        (True, ValueKind.BOOL, "bool(True)"),
        (5, ValueKind.INT, "int(5)"),
        ("x", ValueKind.STRING, 'string("x")'),
        ([1], ValueKind.LIST, "list"),
        ({"a": 1}, ValueKind.MAP, "map"),
    ],
)
def test_value_kinds(value, kind, text):
    assert kind_of(value) is kind
    assert describe(value) == text


@pytest.mark.parametrize(
    "verbosity, expected",
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
)
def test_level_for_verbosity(verbosity, expected):
    assert level_for_verbosity(verbosity) == expected


def _installed_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, "_charm_metadata_handler", False)]


def test_split_stream_logging_replaces_only_its_own_handlers(capsys):
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    saved_level = root.level
    try:
        configure_split_stream_logging(level=logging.INFO)
        configure_split_stream_logging(level=logging.INFO)
        assert len(_installed_handlers()) == 2
        assert foreign in root.handlers

        logger = logging.getLogger("charm_metadata.test")
        logger.info("to stdout")
        logger.warning("to stderr")
        captured = capsys.readouterr()
        assert "to stdout" in captured.out
        assert "to stderr" not in captured.out
        assert "to stderr" in captured.err
    finally:
        for handler in [foreign, *_installed_handlers()]:
            root.removeHandler(handler)
        root.setLevel(saved_level)


def test_meta_mappings_are_read_only_and_detached(mysql_metadata):
    meta = read_meta(mysql_metadata)
    with pytest.raises(TypeError):
        meta.provides["extra"] = meta.provides["server"]
    with pytest.raises(TypeError):
        del meta.storage["data"]

    provides = {"website": Relation("website", RelationRole.PROVIDER, "http")}
    built = Meta(name="dummy", summary="s", description="d", provides=provides)
    provides.clear()
    assert list(built.provides) == ["website"]


def test_meta_is_hashable_and_consistent_with_equality(mysql_metadata):
    first = read_meta(mysql_metadata)
    second = read_meta(mysql_metadata)
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
