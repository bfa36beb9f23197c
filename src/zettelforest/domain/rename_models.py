from __future__ import annotations

"""
Rename Workflow Data Models.

Defines the ordered rename steps handed to a rename applier, the conflicts
detected before applying them, and the result object reported back to the
caller of the compaction workflow.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from zettelforest.domain.forest_models import CompactionResult, Forest

# -----------------------------------------------------------------------------
# PLAN MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RenameStep:
    """
    A single atomic move.

    Attributes:
        source: Current storage path.
        target: Destination storage path.
    """
    source: str
    target: str


@dataclass(frozen=True)
class RenameConflict:
    """
    A planned move that cannot be applied safely.

    Attributes:
        source: Planned source path.
        target: Planned destination path.
        reason: One of target-exists, duplicate-target, missing-source.
    """
    source: str
    target: str
    reason: str


@dataclass(frozen=True)
class RenamePlan:
    """
    Dependency-ordered rename steps plus any conflicts found.

    Attributes:
        steps: Moves in an order that never overwrites a pending source.
        conflicts: Problems that make the plan unsafe to apply.
    """
    steps: Tuple[RenameStep, ...] = ()
    conflicts: Tuple[RenameConflict, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.conflicts

# -----------------------------------------------------------------------------
# WORKFLOW RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WorkflowResult:
    """
    Unified result of a compact-and-apply run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        dry_run: Whether storage was left untouched on purpose.
        compaction: Compaction output computed from the snapshot.
        plan: Rename plan derived from the compaction.
        applied: Steps actually performed by the applier.
        forest: Forest rebuilt after applying (or the snapshot forest).
    """
    ok: bool
    error: str
    dry_run: bool
    compaction: Optional[CompactionResult] = None
    plan: RenamePlan = field(default_factory=RenamePlan)
    applied: Tuple[RenameStep, ...] = ()
    forest: Forest = ()

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(
        compaction: CompactionResult,
        plan: RenamePlan,
        applied: Tuple[RenameStep, ...],
        forest: Forest,
        dry_run: bool = False,
) -> WorkflowResult:
    """Create a successful workflow result."""
    return WorkflowResult(
        ok=True,
        error="",
        dry_run=dry_run,
        compaction=compaction,
        plan=plan,
        applied=tuple(applied),
        forest=forest,
    )


def create_error_result(
        error: str,
        compaction: Optional[CompactionResult] = None,
        plan: Optional[RenamePlan] = None,
        applied: Tuple[RenameStep, ...] = (),
        forest: Forest = (),
        dry_run: bool = False,
) -> WorkflowResult:
    """
    Create a failed workflow result.

    Args:
        error: Detailed error description.
        compaction: Compaction computed before the failure, if any.
        plan: Plan computed before the failure, if any.
        applied: Steps already performed when the failure happened.
        forest: Best known forest at the time of failure.
        dry_run: Whether the run was a dry run.

    Returns:
        WorkflowResult: An immutable error result object.
    """
    return WorkflowResult(
        ok=False,
        error=error,
        dry_run=dry_run,
        compaction=compaction,
        plan=plan or RenamePlan(),
        applied=tuple(applied),
        forest=forest,
    )
