from __future__ import annotations

"""
Unit tests for the Forest Compaction Engine.

Verifies gap closing among siblings, rename propagation to descendants
and file names, idempotence, and the documented letter-ordering quirk past
26 siblings.
"""

from zettelforest.core.forest.builder import build_forest
from zettelforest.core.forest.compaction import compact_forest, rename_basename, rename_path
from zettelforest.core.forest.navigation import iter_nodes
from zettelforest.domain.forest_models import FileRecord
from zettelforest.domain.lettering import letters_for_index


def ids(nodes):
    return [n.id_string for n in nodes]


# -----------------------------------------------------------------------------
# Gap closing
# -----------------------------------------------------------------------------

def test_compact_closes_root_gaps(make_records):
    result = compact_forest(build_forest(make_records("a", "c", "f")))

    assert result.id_renames == {"c": "b", "f": "c"}
    assert ids(result.new_forest) == ["a", "b", "c"]
    assert "a" not in result.id_renames
    assert result.path_renames == {"notes/c.md": "notes/b.md", "notes/f.md": "notes/c.md"}


def test_compact_propagates_to_descendants(make_records):
    """Renaming c to b carries c1 to b1, both in ids and file names."""
    result = compact_forest(build_forest(make_records("a", "c", "c1")))

    assert result.id_renames["c"] == "b"
    assert result.id_renames["c1"] == "b1"
    assert result.path_renames["notes/c1.md"] == "notes/b1.md"

    b = result.new_forest[1]
    assert b.id_string == "b"
    assert ids(b.children) == ["b1"]
    assert b.children[0].file.basename == "b1"


def test_compact_composes_inherited_and_local_renames(make_records):
    """c1c under a renamed c is both rebased and relabelled at its own level."""
    result = compact_forest(build_forest(make_records("a", "c", "c1", "c1c")))

    assert result.id_renames == {"c": "b", "c1": "b1", "c1c": "b1a"}
    assert result.path_renames["notes/c1c.md"] == "notes/b1a.md"


def test_compact_never_relabels_number_segments(make_records):
    result = compact_forest(build_forest(make_records("a", "a2", "a7", "a7b")))

    assert result.id_renames == {"a7b": "a7a"}
    assert ids(result.new_forest[0].children) == ["a2", "a7"]


def test_compact_is_idempotent_on_compact_forest(make_records):
    forest = build_forest(make_records("a", "a1", "a1a", "a1b", "a2", "b"))
    result = compact_forest(forest)

    assert result.id_renames == {}
    assert result.path_renames == {}
    assert result.new_forest == forest
    assert result.changed is False


def test_compact_twice_changes_nothing_the_second_time(make_records):
    first = compact_forest(build_forest(make_records("b", "d", "d3", "d3c", "x")))
    second = compact_forest(first.new_forest)
    assert second.id_renames == {}
    assert second.new_forest == first.new_forest


def test_rename_maps_are_injective(make_records):
    result = compact_forest(build_forest(make_records(
        "b", "b1", "b1c", "b1e", "d", "d2", "d2b", "g", "g1"
    )))
    assert len(set(result.id_renames.values())) == len(result.id_renames)
    assert len(set(result.path_renames.values())) == len(result.path_renames)


def test_applying_renames_and_rebuilding_reproduces_forest(make_records):
    """Re-running the builder on renamed records yields the compacted forest."""
    records = make_records("a", "c", "c1", "c1b", "c1d", "c2", "e", "e5")
    result = compact_forest(build_forest(records))

    renamed = []
    for r in records:
        new_path = result.path_renames.get(r.path, r.path)
        new_id = result.id_renames.get(r.id_string, r.id_string)
        renamed.append(FileRecord(id_string=new_id, path=new_path, basename=new_id))

    assert build_forest(renamed) == result.new_forest

# -----------------------------------------------------------------------------
# File name rewriting
# -----------------------------------------------------------------------------

def test_rename_basename_swaps_identifier_prefix():
    assert rename_basename("c1 Some title", "c1", "b1") == "b1 Some title"


def test_rename_basename_prepends_when_prefix_missing():
    assert rename_basename("Some title", "c1", "b1") == "b1-Some title"


def test_rename_path_keeps_directory_and_extension():
    assert rename_path("box/sub/c1.md", "c1", "b1") == "box/sub/b1.md"
    assert rename_path("c1.md", "c1", "b1") == "b1.md"
    assert rename_path("box/c1", "c1", "b1") == "box/b1"


def test_compact_rewrites_titled_basenames():
    records = [
        FileRecord("a", "z/a.md", "a"),
        FileRecord("c", "z/c Title.md", "c Title"),
        FileRecord("c1", "z/note.md", "note"),
    ]
    result = compact_forest(build_forest(records))

    assert result.path_renames == {
        "z/c Title.md": "z/b Title.md",
        "z/note.md": "z/b1-note.md",
    }
    child = result.new_forest[1].children[0]
    assert child.file.basename == "b1-note"

# -----------------------------------------------------------------------------
# Letter ordering past 26 siblings
# -----------------------------------------------------------------------------

def test_relabelling_past_z_follows_comparator_order_not_generation_order(make_records):
    """
    With 27 root siblings "a".."z" plus "aa", the comparator sorts "aa"
    second, so it becomes "b" and "z" becomes "aa". The resulting sibling
    order no longer matches a rebuild, which sorts "aa" before "b".
    """
    labels = [letters_for_index(i) for i in range(26)] + ["aa"]
    result = compact_forest(build_forest(make_records(*labels)))

    assert result.id_renames["aa"] == "b"
    assert result.id_renames["b"] == "c"
    assert result.id_renames["z"] == "aa"
    assert ids(result.new_forest)[-1] == "aa"

    rebuilt = build_forest(make_records(*ids(result.new_forest)))
    assert ids(rebuilt)[1] == "aa"
    assert ids(rebuilt) != ids(result.new_forest)


def test_every_node_is_visited(make_records):
    forest = build_forest(make_records("a", "a1", "a1a", "b", "b3"))
    result = compact_forest(forest)
    assert len(list(iter_nodes(result.new_forest))) == 5


def test_compact_handles_deep_chains(make_records):
    """Renaming the root of a chain deeper than the recursion limit reaches every level."""
    chain = ["c"]
    for i in range(1, 1200):
        chain.append(chain[-1] + ("1" if i % 2 else "a"))

    result = compact_forest(build_forest(make_records(*chain)))

    assert len(result.id_renames) == 1200
    assert result.id_renames[chain[-1]] == "a" + chain[-1][1:]
    assert result.path_renames[f"notes/{chain[-1]}.md"] == f"notes/a{chain[-1][1:]}.md"
    new_ids = [n.id_string for n in iter_nodes(result.new_forest)]
    assert new_ids == ["a" + c[1:] for c in chain]


def test_compact_keeps_very_long_number_segments(make_records):
    long_num = "7" * 5000
    result = compact_forest(build_forest(make_records("a", "c", "c" + long_num)))
    assert result.id_renames["c" + long_num] == "b" + long_num
