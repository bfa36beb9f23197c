from __future__ import annotations

"""
Forest Navigation Queries.

Read-only lookups over an immutable forest: locate a node by identifier
string and move to its parent, children, siblings or subtree root.
"""

from typing import Iterator, Optional, Tuple

from zettelforest.domain.forest_models import Forest, Node


def iter_nodes(forest: Forest) -> Iterator[Node]:
    """Yield every node in depth-first pre-order."""
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(forest: Forest, id_string: str) -> Optional[Node]:
    for node in iter_nodes(forest):
        if node.id_string == id_string:
            return node
    return None


def get_parent(forest: Forest, id_string: str) -> Optional[Node]:
    """Parent node of `id_string`; None for roots and unknown identifiers."""
    path = _path_to(forest, id_string)
    if len(path) < 2:
        return None
    return path[-2]


def get_children(forest: Forest, id_string: str) -> Tuple[Node, ...]:
    node = find_node(forest, id_string)
    return node.children if node is not None else ()


def get_siblings(forest: Forest, id_string: str) -> Tuple[Node, ...]:
    """Ordered sibling group containing the node (the roots for a root)."""
    path = _path_to(forest, id_string)
    if not path:
        return ()
    if len(path) == 1:
        return forest
    return path[-2].children


def get_next_sibling(forest: Forest, id_string: str) -> Optional[Node]:
    return _sibling_at_offset(forest, id_string, 1)


def get_prev_sibling(forest: Forest, id_string: str) -> Optional[Node]:
    return _sibling_at_offset(forest, id_string, -1)


def get_root(forest: Forest, id_string: str) -> Optional[Node]:
    path = _path_to(forest, id_string)
    return path[0] if path else None

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _path_to(forest: Forest, id_string: str) -> Tuple[Node, ...]:
    """Chain of nodes from a root down to the target, or () when absent."""
    stack = [(node, (node,)) for node in reversed(forest)]
    while stack:
        node, path = stack.pop()
        if node.id_string == id_string:
            return path
        stack.extend((child, path + (child,)) for child in reversed(node.children))
    return ()


def _sibling_at_offset(forest: Forest, id_string: str, offset: int) -> Optional[Node]:
    siblings = get_siblings(forest, id_string)
    for i, node in enumerate(siblings):
        if node.id_string == id_string:
            j = i + offset
            return siblings[j] if 0 <= j < len(siblings) else None
    return None
