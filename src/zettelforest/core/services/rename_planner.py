from __future__ import annotations

"""
Rename Planning Service.

Turns a path rename map into an ordered list of moves that never writes
onto a path still waiting to be moved, and reports the moves that would
clobber untouched files, collide with each other or refer to files that
vanished since the snapshot was taken.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Set

from zettelforest.domain.constants import (
    CONFLICT_DUPLICATE_TARGET,
    CONFLICT_MISSING_SOURCE,
    CONFLICT_TARGET_EXISTS,
    DEFAULT_TEMP_SUFFIX,
)
from zettelforest.domain.rename_models import RenameConflict, RenamePlan, RenameStep

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def plan_renames(
        path_renames: Mapping[str, str],
        existing_paths: Iterable[str],
        temp_suffix: str = DEFAULT_TEMP_SUFFIX,
) -> RenamePlan:
    """
    Order path renames and detect conflicts against a storage snapshot.

    Args:
        path_renames: Old path -> new path, as returned by compaction.
        existing_paths: Every path currently present in storage.
        temp_suffix: Suffix for temporary paths used to break rename cycles.

    Returns:
        RenamePlan: Ordered steps and detected conflicts.
    """
    pending: Dict[str, str] = {
        src: dst for src, dst in sorted(path_renames.items()) if src != dst
    }
    existing: Set[str] = set(existing_paths)

    conflicts = _detect_conflicts(pending, existing)
    for c in conflicts:
        logger.warning(f"Rename conflict ({c.reason}): '{c.source}' -> '{c.target}'")

    steps = _order_steps(pending, existing, temp_suffix)
    return RenamePlan(steps=tuple(steps), conflicts=tuple(conflicts))

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _detect_conflicts(pending: Dict[str, str], existing: Set[str]) -> List[RenameConflict]:
    conflicts: List[RenameConflict] = []
    target_counts = Counter(pending.values())

    for src, dst in pending.items():
        if src not in existing:
            conflicts.append(RenameConflict(src, dst, CONFLICT_MISSING_SOURCE))
        if target_counts[dst] > 1:
            conflicts.append(RenameConflict(src, dst, CONFLICT_DUPLICATE_TARGET))
        elif dst in existing and dst not in pending:
            conflicts.append(RenameConflict(src, dst, CONFLICT_TARGET_EXISTS))

    return conflicts


def _order_steps(pending: Dict[str, str], existing: Set[str], temp_suffix: str) -> List[RenameStep]:
    """
    Emit each move once its destination is no longer a pending source.

    A cycle (a -> b, b -> a) is broken by parking one member on a temporary
    path and finishing that move after the rest of the cycle.
    """
    remaining = dict(pending)
    steps: List[RenameStep] = []
    deferred: List[RenameStep] = []
    taken = existing | set(pending.values())

    while remaining:
        progressed = False
        for src in list(remaining):
            dst = remaining[src]
            if dst in remaining:
                continue
            steps.append(RenameStep(src, dst))
            del remaining[src]
            progressed = True

        if progressed:
            continue

        src = next(iter(remaining))
        dst = remaining.pop(src)
        temp = _temp_path(dst, temp_suffix, taken)
        taken.add(temp)
        logger.debug(f"Breaking rename cycle via temporary path '{temp}'")
        steps.append(RenameStep(src, temp))
        deferred.append(RenameStep(temp, dst))

    return steps + deferred


def _temp_path(target: str, suffix: str, taken: Set[str]) -> str:
    candidate = f"{target}.{suffix}"
    counter = 1
    while candidate in taken:
        candidate = f"{target}.{suffix}{counter}"
        counter += 1
    return candidate
