from __future__ import annotations

"""
Tree Renderer.

Converts a forest of path nodes into a box-drawing directory tree.
Output depends only on node names: siblings are always visited in
lexicographic order.
"""

from typing import List

from codexreport.domain.constants import BRANCH, CORNER, PIPE_PREFIX, SPACE_PREFIX
from codexreport.domain.tree_models import Forest, Node

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_forest(forest: Forest) -> List[str]:
    """
    Render every root of the forest and its descendants.

    Roots start with an empty prefix; only the lexicographically last root
    is drawn with the corner connector.

    Args:
        forest: Root name -> root node mapping.

    Returns:
        List[str]: Tree lines in depth-first pre-order.
    """
    lines: List[str] = []
    root_names = sorted(forest)
    total = len(root_names)

    for i, name in enumerate(root_names):
        render_node(forest[name], lines, prefix="", is_last=(i == total - 1))

    return lines


def render_node(node: Node, lines: List[str], prefix: str, is_last: bool) -> None:
    """
    Recursively append `node` and its subtree to `lines`.

    Args:
        node: Node to draw.
        lines: Accumulator list for output strings.
        prefix: Guide string inherited from the ancestors.
        is_last: True if the node is the last of its siblings.
    """
    connector = CORNER if is_last else BRANCH
    lines.append(f"{prefix}{connector}{node.name}")

    child_prefix = prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX)
    children = list(node.iter_sorted())
    total = len(children)

    for i, child in enumerate(children):
        render_node(child, lines, child_prefix, is_last=(i == total - 1))
