from __future__ import annotations

from .core.forest.builder import build_forest
from .core.forest.compaction import compact_forest
from .core.forest.navigation import (
    find_node,
    get_children,
    get_next_sibling,
    get_parent,
    get_prev_sibling,
    get_root,
    get_siblings,
    iter_nodes,
)
from .core.forest.renderer import render_forest
from .core.services.rename_planner import plan_renames
from .core.services.workflow import compact_and_apply, compact_folder, load_forest
from .domain.errors import (
    IdentifierParseError,
    IdentifierValidationError,
    ParseErrorKind,
    RecordError,
    RenameApplyError,
    RenameConflictError,
    ValidationErrorKind,
    ZettelForestError,
)
from .domain.forest_models import CompactionResult, FileRecord, FileReference, Forest, Node
from .domain.identifier import (
    Identifier,
    Ordering,
    Segment,
    SegmentType,
    compare_identifiers,
    identifier_sort_key,
    is_valid_identifier,
)
from .domain.rename_models import RenameConflict, RenamePlan, RenameStep, WorkflowResult

__all__ = [
    "Identifier",
    "Segment",
    "SegmentType",
    "Ordering",
    "compare_identifiers",
    "identifier_sort_key",
    "is_valid_identifier",
    "FileRecord",
    "FileReference",
    "Node",
    "Forest",
    "CompactionResult",
    "build_forest",
    "compact_forest",
    "iter_nodes",
    "find_node",
    "get_parent",
    "get_children",
    "get_siblings",
    "get_next_sibling",
    "get_prev_sibling",
    "get_root",
    "render_forest",
    "RenameStep",
    "RenameConflict",
    "RenamePlan",
    "WorkflowResult",
    "plan_renames",
    "load_forest",
    "compact_and_apply",
    "compact_folder",
    "ZettelForestError",
    "IdentifierParseError",
    "IdentifierValidationError",
    "ParseErrorKind",
    "ValidationErrorKind",
    "RecordError",
    "RenameConflictError",
    "RenameApplyError",
]
