from __future__ import annotations

"""
Forest Builder.

Reconstructs the tree implied by a flat snapshot of identifier-bearing
records. Records whose identifier does not parse are skipped; nodes whose
parent identifier has no record of its own are dropped together with their
subtree rather than hoisted to the root level.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from zettelforest.domain.constants import DUPLICATE_POLICIES, DUPLICATE_POLICY_LAST
from zettelforest.domain.errors import IdentifierParseError
from zettelforest.domain.forest_models import FileRecord, FileReference, Forest, Node
from zettelforest.domain.identifier import Identifier, identifier_sort_key

logger = logging.getLogger(__name__)

RecordLike = Union[FileRecord, Mapping[str, object]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_forest(
        records: Iterable[RecordLike],
        duplicate_policy: str = DUPLICATE_POLICY_LAST,
) -> Forest:
    """
    Build a sorted forest from identifier-bearing records.

    Args:
        records: FileRecord instances or mappings with idString/path/basename.
        duplicate_policy: "last" keeps the last record seen for a repeated
                          identifier string, "first" keeps the first one.

    Returns:
        Forest: Root nodes sorted by identifier order, children sorted likewise.

    Raises:
        RecordError: If a mapping is missing a field or has a non-string value.
        ValueError: If the duplicate policy is unknown.
    """
    if duplicate_policy not in DUPLICATE_POLICIES:
        raise ValueError(
            f"Unknown duplicate policy '{duplicate_policy}', expected one of {DUPLICATE_POLICIES}."
        )

    # 1. Parse and index by canonical identifier string
    entries = _index_records(records, duplicate_policy)

    # 2. Group surviving identifiers under their parent identifier string
    children_of: Dict[Optional[str], List[str]] = {None: []}
    for key, (identifier, _) in entries.items():
        parent = identifier.parent()
        children_of.setdefault(None if parent is None else str(parent), []).append(key)

    orphans = [
        key for parent_key, keys in children_of.items()
        if parent_key is not None and parent_key not in entries
        for key in keys
    ]
    if orphans:
        logger.debug(f"Dropping {len(orphans)} orphaned subtree(s): {sorted(orphans)}")

    # 3. Materialize from the roots down; orphans are never reached
    roots = _materialize(entries, children_of)

    logger.info(f"Built forest with {len(roots)} root(s) from {len(entries)} identifier(s)")
    return roots

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _index_records(
        records: Iterable[RecordLike],
        duplicate_policy: str,
) -> Dict[str, Tuple[Identifier, FileReference]]:
    """Parse records into an identifier-keyed lookup honouring the duplicate policy."""
    entries: Dict[str, Tuple[Identifier, FileReference]] = {}
    skipped = 0

    for raw in records:
        record = raw if isinstance(raw, FileRecord) else FileRecord.from_mapping(raw)
        try:
            identifier = Identifier.parse(record.id_string)
        except IdentifierParseError as e:
            skipped += 1
            logger.debug(f"Skipping non-identifier record '{record.path}': {e}")
            continue

        key = str(identifier)
        if key in entries:
            kept = entries[key][1].path if duplicate_policy != DUPLICATE_POLICY_LAST else record.path
            logger.debug(f"Duplicate identifier '{key}'; keeping '{kept}' ({duplicate_policy} wins)")
            if duplicate_policy != DUPLICATE_POLICY_LAST:
                continue

        entries[key] = (identifier, record.file)

    if skipped:
        logger.debug(f"Skipped {skipped} record(s) without a valid identifier")
    return entries


def _materialize(
        entries: Dict[str, Tuple[Identifier, FileReference]],
        children_of: Dict[Optional[str], List[str]],
) -> Forest:
    """
    Build the sorted root tuple, children first, without recursion.

    Keys are collected in pre-order from the roots, so walking that list
    backwards completes every child before its parent.
    """
    order: List[str] = []
    stack = list(children_of[None])
    while stack:
        key = stack.pop()
        order.append(key)
        stack.extend(children_of.get(key, []))

    built: Dict[str, Node] = {}
    for key in reversed(order):
        identifier, file_ref = entries[key]
        built[key] = Node(
            identifier=identifier,
            children=_sorted_nodes(built[k] for k in children_of.get(key, [])),
            file=file_ref,
        )

    return _sorted_nodes(built[k] for k in children_of[None])


def _sorted_nodes(nodes: Iterable[Node]) -> Forest:
    return tuple(sorted(nodes, key=lambda n: identifier_sort_key(n.identifier)))
