from __future__ import annotations

"""
Forest Renderer.

Converts a forest into a visual ASCII tree for inspection and logging.
Nodes are drawn in forest order, which is already identifier order.
"""

from typing import List, Tuple

from zettelforest.domain.forest_models import Forest, Node

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_forest(forest: Forest, show_paths: bool = False) -> List[str]:
    """
    Render the forest using standard ASCII connectors (├──, └──).

    Args:
        forest: Root nodes to draw.
        show_paths: Append the backing file path of each node.

    Returns:
        List[str]: One line per node.
    """
    lines: List[str] = []
    stack: List[Tuple[Node, str, bool]] = _level_frames(forest, "")

    while stack:
        node, prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "

        label = node.id_string
        if show_paths and node.file is not None:
            label = f"{label} ({node.file.path})"
        lines.append(f"{prefix}{connector}{label}")

        new_prefix = prefix + ("    " if is_last else "│   ")
        stack.extend(_level_frames(node.children, new_prefix))

    return lines


def _level_frames(nodes: Forest, prefix: str) -> List[Tuple[Node, str, bool]]:
    """Stack frames for one sibling list, reversed so the first pops first."""
    total = len(nodes)
    return [(node, prefix, i == total - 1) for i, node in reversed(list(enumerate(nodes)))]
