from __future__ import annotations

"""
Path Tree Data Models.

Provides the node structure used by the tree builder and renderer to
represent the hierarchy implied by a flat list of filesystem paths.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class Node:
    """
    A named entry in the path hierarchy (file or directory).

    Attributes:
        name: Last path segment represented by this node.
        is_directory: True once the filesystem (or a child) shows it is a directory.
        children: Owned child nodes keyed by name.
    """
    name: str
    is_directory: bool = False
    children: Dict[str, "Node"] = field(default_factory=dict)

    def child(self, name: str) -> Optional["Node"]:
        """Return the direct child called `name`, if present."""
        return self.children.get(name)

    def add_child(self, node: "Node") -> "Node":
        """
        Attach `node` as a child unless a sibling with the same name exists.

        Returns:
            Node: The node stored under that name (existing nodes are kept).
        """
        existing = self.children.get(node.name)
        if existing is not None:
            return existing
        self.children[node.name] = node
        return node

    def iter_sorted(self) -> Iterator["Node"]:
        """Yield children in lexicographic order of name."""
        for name in sorted(self.children):
            yield self.children[name]


# Root name -> root node. One entry per distinct top-level segment.
Forest = Dict[str, Node]
