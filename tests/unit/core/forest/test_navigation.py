from __future__ import annotations

"""
Unit tests for forest navigation queries.
"""

import pytest

from zettelforest.core.forest.builder import build_forest
from zettelforest.core.forest.navigation import (
    find_node,
    get_children,
    get_next_sibling,
    get_parent,
    get_prev_sibling,
    get_root,
    get_siblings,
    iter_nodes,
)


@pytest.fixture
def forest(make_records):
    return build_forest(make_records("a", "a1", "a1a", "a1b", "a2", "b", "b1"))


def ids(nodes):
    return [n.id_string for n in nodes]


def test_iter_nodes_is_pre_order(forest):
    assert ids(iter_nodes(forest)) == ["a", "a1", "a1a", "a1b", "a2", "b", "b1"]


def test_find_node(forest):
    assert find_node(forest, "a1b").file.path == "notes/a1b.md"
    assert find_node(forest, "c") is None


def test_parent_and_children(forest):
    assert get_parent(forest, "a1b").id_string == "a1"
    assert get_parent(forest, "a") is None
    assert get_parent(forest, "zz") is None
    assert ids(get_children(forest, "a1")) == ["a1a", "a1b"]
    assert get_children(forest, "b1") == ()
    assert get_children(forest, "missing") == ()


def test_siblings_of_root_are_roots(forest):
    assert ids(get_siblings(forest, "b")) == ["a", "b"]
    assert ids(get_siblings(forest, "a2")) == ["a1", "a2"]
    assert get_siblings(forest, "missing") == ()


def test_next_and_previous_sibling(forest):
    assert get_next_sibling(forest, "a1a").id_string == "a1b"
    assert get_next_sibling(forest, "a1b") is None
    assert get_prev_sibling(forest, "a2").id_string == "a1"
    assert get_prev_sibling(forest, "a") is None
    assert get_next_sibling(forest, "missing") is None


def test_get_root(forest):
    assert get_root(forest, "a1b").id_string == "a"
    assert get_root(forest, "b").id_string == "b"
    assert get_root(forest, "missing") is None
