from __future__ import annotations

"""
Path Tree Generator.

Builds a forest of named nodes from a flat list of filesystem paths. Each
path contributes its full segment chain; overlapping paths are merged so
that every root name maps to a single tree. Directory status is inferred
by querying the live filesystem through a probe object.
"""

import logging
import os
from typing import Iterable, List, Optional, Protocol, Tuple

from codexreport.domain.constants import ROOT_MARKERS
from codexreport.domain.tree_models import Forest, Node
from codexreport.infra.fs import LocalPathProbe

logger = logging.getLogger(__name__)


class PathProbe(Protocol):
    """Filesystem questions the builder needs answered."""

    def exists(self, path: str) -> bool: ...

    def is_dir(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def split_segments(path: str) -> List[str]:
    """
    Split a path string into its segments.

    An absolute path keeps its leading "/" as the first segment. Empty
    segments produced by repeated or trailing separators are dropped.

    Args:
        path: Raw path string.

    Returns:
        List[str]: Ordered path segments.
    """
    normalized = path.replace(os.sep, "/") if os.sep != "/" else path
    parts = [p for p in normalized.split("/") if p]
    if normalized.startswith("/"):
        return ["/"] + parts
    return parts


def insert_path(forest: Forest, path: str, probe: Optional[PathProbe] = None) -> Optional[Node]:
    """
    Ensure the full segment chain of `path` exists in `forest`.

    A leading "." or "/" segment is discarded and the next segment becomes
    the root name. Roots are always directories. Missing child segments are
    created with a directory flag derived from the filesystem; existing
    children are reused untouched.

    Args:
        forest: Forest to extend in place.
        path: Filesystem path to insert.
        probe: Filesystem collaborator. Defaults to the local filesystem.

    Returns:
        Optional[Node]: The node for the last segment, or None if the path
                        had no usable segments.
    """
    probe = probe or LocalPathProbe()

    segments = split_segments(path)
    if segments and segments[0] in ROOT_MARKERS:
        segments = segments[1:]
    if not segments:
        return None

    root_name = segments[0]
    current = forest.get(root_name)
    if current is None:
        current = Node(root_name, is_directory=True)
        forest[root_name] = current

    parent_dir = os.path.dirname(path)
    final_segment = os.path.basename(path)
    path_is_dir = probe.is_dir(path)

    for segment in segments[1:]:
        existing = current.child(segment)
        if existing is not None:
            current = existing
            continue

        is_dir = probe.is_dir(os.path.join(parent_dir, segment)) or (
            path_is_dir and segment == final_segment
        )

        # An intermediate segment of a directory path is itself a directory
        if not is_dir and path_is_dir and segment != final_segment:
            is_dir = True

        current = current.add_child(Node(segment, is_directory=is_dir))

    if path_is_dir:
        current.is_directory = True

    return current


def build_forest(
        paths: Iterable[str],
        probe: Optional[PathProbe] = None,
) -> Tuple[Forest, List[str]]:
    """
    Insert every existing path into a fresh forest.

    Paths that do not exist are not inserted and are returned, in input
    order, so the caller can report them.

    Args:
        paths: Candidate paths in list order.
        probe: Filesystem collaborator. Defaults to the local filesystem.

    Returns:
        Tuple[Forest, List[str]]: The forest and the missing paths.
    """
    probe = probe or LocalPathProbe()
    forest: Forest = {}
    missing: List[str] = []

    for path in paths:
        if not probe.exists(path):
            logger.info(f"Skipping missing path: {path}")
            missing.append(path)
            continue
        insert_path(forest, path, probe)

    logger.debug(f"Forest built with {len(forest)} root(s); {len(missing)} path(s) missing.")
    return forest, missing
