from __future__ import annotations

"""
Forest Compaction Engine.

Closes the gaps left in sibling letter sequences (siblings "a, c, f" become
"a, b, c") and carries every relabelling down to the descendants of the
renamed node, together with the file names that embed those identifiers.

Number segments are never relabelled. The result is descriptive only: the
caller applies the returned path renames to storage and rebuilds.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from zettelforest.domain.constants import BASENAME_SEPARATOR
from zettelforest.domain.forest_models import CompactionResult, FileReference, Forest, Node
from zettelforest.domain.identifier import Identifier, Segment, identifier_sort_key
from zettelforest.domain.lettering import letters_for_index

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compact_forest(forest: Forest) -> CompactionResult:
    """
    Relabel sibling letter segments to a contiguous a, b, c, ... run.

    Levels are processed depth-first from the roots. At each level siblings
    are sorted by identifier order and the segment at the parent's depth is
    replaced by the letter label of the sibling's index. A node whose
    ancestor was relabelled inherits the new prefix; rename maps always go
    from the original identifier/path to the final one.

    Sibling order in the result is the order of the original identifiers.
    Past 26 siblings the generated labels ("z", "aa") no longer sort the
    same way under compare_identifiers ("aa" < "z").

    Args:
        forest: Root nodes as produced by build_forest.

    Returns:
        CompactionResult: New forest plus identifier and path rename maps.
    """
    id_renames: Dict[str, str] = {}
    path_renames: Dict[str, str] = {}

    new_forest = _compact_tree(forest, id_renames, path_renames)

    if id_renames:
        logger.info(
            f"Compaction relabels {len(id_renames)} identifier(s) "
            f"and {len(path_renames)} file(s)"
        )
    else:
        logger.info("Forest already compact; nothing to rename")

    return CompactionResult(
        new_forest=new_forest,
        id_renames=id_renames,
        path_renames=path_renames,
    )


def rename_basename(basename: str, old_id: str, new_id: str) -> str:
    """
    Rewrite a file basename for an identifier change.

    The identifier prefix is swapped when present; otherwise the new
    identifier and a hyphen are prepended to the whole old basename.
    """
    if basename.startswith(old_id):
        return new_id + basename[len(old_id):]
    return f"{new_id}{BASENAME_SEPARATOR}{basename}"


def rename_path(path: str, old_basename: str, new_basename: str) -> str:
    """
    Replace the final path component, keeping the directory prefix.

    When the final component extends the old basename (an extension such
    as ".md"), that trailing part is carried over to the new name.
    """
    # Replacing the whole final component with the basename would strip
    # ".md" from provider records, whose basename excludes the extension.
    # Rebuilding from renamed files relies on the suffix being kept.
    head, sep, last = path.rpartition("/")
    tail = last[len(old_basename):] if old_basename and last.startswith(old_basename) else ""
    return f"{head}{sep}{new_basename}{tail}"

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

@dataclass
class _Relabelled:
    """A node whose new identifier is known but whose children are not built yet."""
    identifier: Identifier
    file: Optional[FileReference]
    children: List["_Relabelled"] = field(default_factory=list)
    node: Optional[Node] = None


def _compact_tree(
        forest: Forest,
        id_renames: Dict[str, str],
        path_renames: Dict[str, str],
) -> Forest:
    """
    Relabel every sibling list top-down, then assemble new nodes bottom-up.

    An explicit stack replaces recursion so chains deeper than the
    interpreter recursion limit compact like any other forest.
    """
    roots: List[_Relabelled] = []
    visited: List[_Relabelled] = []
    stack: List[Tuple[Forest, Optional[Identifier], List[_Relabelled]]] = [(forest, None, roots)]

    while stack:
        siblings, new_parent, slots = stack.pop()
        ordered = sorted(siblings, key=lambda n: identifier_sort_key(n.identifier))

        for index, node in enumerate(ordered):
            new_id = _relabel(node.identifier, new_parent, index)
            item = _Relabelled(new_id, _record_rename(node, new_id, id_renames, path_renames))
            slots.append(item)
            visited.append(item)
            stack.append((node.children, new_id, item.children))

    # Children are always visited after their parent
    for item in reversed(visited):
        item.node = Node(
            identifier=item.identifier,
            children=tuple(child.node for child in item.children),
            file=item.file,
        )
    return tuple(item.node for item in roots)


def _relabel(identifier: Identifier, new_parent: Optional[Identifier], index: int) -> Identifier:
    """Rebase onto the new parent, then give the own letter segment its index label."""
    new_id = _rebase(identifier, new_parent)
    depth = new_parent.depth if new_parent is not None else 0
    if new_id.segments[depth].is_letters:
        new_id = new_id.replace_segment(depth, Segment.letters(letters_for_index(index)))
    return new_id


def _record_rename(
        node: Node,
        new_id: Identifier,
        id_renames: Dict[str, str],
        path_renames: Dict[str, str],
) -> Optional[FileReference]:
    """Store the rename of a changed node and return its (possibly renamed) file."""
    old_key, new_key = node.id_string, str(new_id)
    if new_key == old_key:
        return node.file

    id_renames[old_key] = new_key
    if node.file is None:
        return None

    new_file = _rename_file(node.file, old_key, new_key)
    path_renames[node.file.path] = new_file.path
    logger.debug(f"Rename '{node.file.path}' -> '{new_file.path}'")
    return new_file


def _rebase(identifier: Identifier, new_parent: Optional[Identifier]) -> Identifier:
    """Swap the identifier's parent prefix for the (possibly relabelled) parent."""
    if new_parent is None:
        return identifier
    return Identifier(new_parent.segments + identifier.segments[new_parent.depth:])


def _rename_file(file_ref: FileReference, old_id: str, new_id: str) -> FileReference:
    new_basename = rename_basename(file_ref.basename, old_id, new_id)
    return FileReference(
        path=rename_path(file_ref.path, file_ref.basename, new_basename),
        basename=new_basename,
    )
