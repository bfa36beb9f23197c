from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. Record validation at the collaborator boundary.
2. Immutability of nodes and result objects.
3. Workflow result factories and error messages.
"""

import pytest

from zettelforest.domain.errors import RecordError, RenameApplyError, RenameConflictError
from zettelforest.domain.forest_models import CompactionResult, FileRecord, FileReference, Node
from zettelforest.domain.identifier import Identifier
from zettelforest.domain.rename_models import (
    RenameConflict,
    RenamePlan,
    RenameStep,
    create_error_result,
    create_success_result,
)


def test_file_record_from_mapping_accepts_both_spellings():
    camel = FileRecord.from_mapping({"idString": "a1", "path": "n/a1.md", "basename": "a1"})
    snake = FileRecord.from_mapping({"id_string": "a1", "path": "n/a1.md", "basename": "a1"})
    assert camel == snake
    assert camel.file == FileReference(path="n/a1.md", basename="a1")


@pytest.mark.parametrize("data", [
    {"path": "a.md", "basename": "a"},
    {"idString": "a", "basename": "a"},
    {"idString": "a", "path": "a.md"},
    {"idString": 1, "path": "a.md", "basename": "a"},
    {"idString": "a", "path": None, "basename": "a"},
])
def test_file_record_from_mapping_rejects_bad_shapes(data):
    """Missing or non-string fields are rejected rather than coerced."""
    with pytest.raises(RecordError):
        FileRecord.from_mapping(data)


def test_file_record_from_mapping_rejects_non_mapping():
    with pytest.raises(RecordError):
        FileRecord.from_mapping(["a", "a.md", "a"])


def test_node_is_frozen_and_children_become_tuple():
    child = Node(Identifier.parse("a1"))
    node = Node(Identifier.parse("a"), children=[child])
    assert node.children == (child,)
    assert node.id_string == "a"
    assert node.file is None
    with pytest.raises(AttributeError):
        node.children = ()


def test_compaction_result_changed_flag():
    assert CompactionResult(new_forest=()).changed is False
    assert CompactionResult(new_forest=(), id_renames={"c": "b"}).changed is True


def test_rename_plan_ok_reflects_conflicts():
    assert RenamePlan().ok is True
    plan = RenamePlan(conflicts=(RenameConflict("a.md", "b.md", "target-exists"),))
    assert plan.ok is False


def test_workflow_result_factories():
    plan = RenamePlan(steps=(RenameStep("c.md", "b.md"),))
    compaction = CompactionResult(new_forest=(), path_renames={"c.md": "b.md"})

    ok = create_success_result(compaction, plan, [RenameStep("c.md", "b.md")], ())
    assert ok.ok is True
    assert ok.error == ""
    assert ok.applied == (RenameStep("c.md", "b.md"),)

    failed = create_error_result("boom")
    assert failed.ok is False
    assert failed.error == "boom"
    assert failed.plan == RenamePlan()
    assert failed.compaction is None


def test_error_messages_name_the_problem():
    step = RenameStep("c.md", "b.md")
    err = RenameApplyError(step, "target already exists")
    assert err.step is step
    assert "c.md" in str(err) and "target already exists" in str(err)

    conflicts = [RenameConflict("c.md", "b.md", "target-exists")]
    assert "1 rename conflict" in str(RenameConflictError(conflicts))
