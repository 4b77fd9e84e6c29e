# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for the context prefix tree."""

import pytest

from copilot_logtree import DEFAULT_CONTEXT, WrongLoggersConfigurationError
from copilot_logtree.context_tree import ContextTree

CONSOLE = {"kind": "console", "level": "info"}


def test_split_accepts_all_delimiters():
    tree = ContextTree()

    assert tree.split(r"\app\http") == ["app", "http"]
    assert tree.split("app.http") == ["app", "http"]
    assert tree.split("/app/http/") == ["app", "http"]
    assert tree.split("") == []


def test_split_with_custom_delimiter():
    tree = ContextTree(delimiters=[":"])

    assert tree.split("app:http.client") == ["app", "http.client"]


def test_empty_delimiter_rejected():
    with pytest.raises(WrongLoggersConfigurationError):
        ContextTree(delimiters=[""])


def test_build_creates_nodes_for_every_segment():
    tree = ContextTree.from_config({r"\a\b\c": CONSOLE, "a.d": [CONSOLE]})

    # root, a, b, c, d
    assert len(tree.nodes) == 5
    assert [tree.nodes[i].path for i in range(5)] == ["", "a", "a.b", "a.b.c", "a.d"]
    assert tree.nodes[tree.root.children["a"]].specs is None


def test_single_spec_is_wrapped():
    tree = ContextTree.from_config({"a": CONSOLE})

    assert tree.resolve("a").specs == (CONSOLE,)


def test_parent_links():
    tree = ContextTree.from_config({"a.b": CONSOLE})
    node = tree.resolve("a.b")

    parent = tree.nodes[node.parent]
    assert parent.path == "a"
    assert tree.nodes[parent.parent] is tree.root


def test_most_specific_prefix_wins():
    tree = ContextTree.from_config({r"\a": [CONSOLE], r"\a\b": [CONSOLE]})

    assert tree.resolve(r"\a\b\c").path == "a.b"
    assert tree.resolve(r"\a\x").path == "a"
    assert tree.resolve("a").path == "a"


def test_missing_intermediate_keeps_last_match():
    tree = ContextTree.from_config({"a": [CONSOLE], "a.b.c": [CONSOLE]})

    assert tree.resolve("a.b").path == "a"
    assert tree.resolve("a.x.c").path == "a"
    assert tree.resolve("a.b.c.d").path == "a.b.c"


def test_unconfigured_context_resolves_to_none():
    tree = ContextTree.from_config({"a.b": [CONSOLE]})

    assert tree.resolve("a") is None
    assert tree.resolve("x.y") is None
    assert tree.resolve("") is None


def test_root_config_only_matches_empty_context():
    tree = ContextTree.from_config({"": [CONSOLE]})

    assert tree.resolve("") is tree.root
    assert tree.resolve("a") is None


def test_last_duplicate_wins():
    other = {"kind": "silent", "level": "debug"}
    tree = ContextTree.from_config({"a.b": [CONSOLE], r"\a\b": [other]})

    assert tree.resolve("a.b").specs == (other,)


def test_value_must_be_spec_or_list():
    with pytest.raises(WrongLoggersConfigurationError, match="logger spec"):
        ContextTree.from_config({"a": "console"})


def test_list_entries_must_be_specs():
    with pytest.raises(WrongLoggersConfigurationError, match="must contain logger specs"):
        ContextTree.from_config({"a": [CONSOLE, 42]})


def test_config_must_be_mapping():
    with pytest.raises(WrongLoggersConfigurationError):
        ContextTree.from_config([("a", CONSOLE)])


def test_reserved_prefix_rejected():
    with pytest.raises(WrongLoggersConfigurationError, match="reserved prefix"):
        ContextTree.from_config({"app._internal": [CONSOLE]})


def test_reserved_names_allowed():
    tree = ContextTree.from_config({DEFAULT_CONTEXT: [CONSOLE]}, reserved_names=[DEFAULT_CONTEXT])

    assert tree.resolve(DEFAULT_CONTEXT).path == DEFAULT_CONTEXT


def test_missing_fields_are_not_checked_at_build():
    tree = ContextTree.from_config({"a": [{"kind": "console"}]})

    assert tree.resolve("a").specs == ({"kind": "console"},)


def test_node_builds_once():
    tree = ContextTree.from_config({"a": [CONSOLE]})
    node = tree.resolve("a")
    calls = []
    sentinel = object()

    def build(n):
        calls.append(n)
        return sentinel

    assert node.get_logger(build) is sentinel
    assert node.get_logger(build) is sentinel
    assert calls == [node]
    assert node.is_built


def test_failed_build_is_retried():
    tree = ContextTree.from_config({"a": [CONSOLE]})
    node = tree.resolve("a")
    attempts = []

    def build(n):
        attempts.append(n)
        if len(attempts) == 1:
            raise RuntimeError("boom")
        return "built"

    with pytest.raises(RuntimeError):
        node.get_logger(build)
    assert not node.is_built

    assert node.get_logger(build) == "built"
    assert len(attempts) == 2
