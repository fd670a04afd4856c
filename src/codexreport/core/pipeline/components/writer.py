from __future__ import annotations

"""
Content Block Emitter.

Writes the tagged, fenced block for each listed file into the output
stream. Binary or unreadable files degrade to a placeholder so that one
bad entry never aborts the document.
"""

import logging
import os
from typing import Dict, Iterable, TextIO

from codexreport.core.pipeline.components.reader import is_binary_file, stream_file_content
from codexreport.domain.constants import (
    BINARY_PLACEHOLDER,
    CODE_FENCE,
    DEFAULT_LANGUAGE_HINT,
    FILE_BLOCK_CLOSE,
    FILE_BLOCK_OPEN,
    UNREADABLE_PLACEHOLDER,
)

logger = logging.getLogger(__name__)

STATUS_TEXT = "text"
STATUS_BINARY = "binary"
STATUS_UNREADABLE = "unreadable"
STATUS_SKIPPED = "skipped"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def language_hint(path: str) -> str:
    """Return the extension of `path` without its dot, or 'text' if it has none."""
    _, ext = os.path.splitext(path)
    return ext[1:] if ext else DEFAULT_LANGUAGE_HINT


def emit_file_block(path: str, out: TextIO) -> str:
    """
    Write the block for a single listed path.

    Paths that are not regular files (directories, missing entries) are
    skipped without output.

    Format:
    <file path="<path>">
    ```<hint>
    <content or placeholder>
    ```
    </file>

    Args:
        path: Literal path string from the list.
        out: Destination text stream.

    Returns:
        str: One of 'text', 'binary', 'unreadable' or 'skipped'.
    """
    if not os.path.isfile(path):
        return STATUS_SKIPPED

    out.write(FILE_BLOCK_OPEN.format(path=path) + "\n")
    out.write(f"{CODE_FENCE}{language_hint(path)}\n")

    if is_binary_file(path):
        out.write(BINARY_PLACEHOLDER + "\n")
        status = STATUS_BINARY
    else:
        status = _write_content(path, out)

    out.write(f"{CODE_FENCE}\n")
    out.write(FILE_BLOCK_CLOSE + "\n")
    return status


def emit_file_contents(paths: Iterable[str], out: TextIO) -> Dict[str, int]:
    """
    Emit a block for every path, preserving list order.

    Args:
        paths: Listed paths, including entries that may be skipped.
        out: Destination text stream.

    Returns:
        Dict[str, int]: Number of paths per emission status.
    """
    counts = {STATUS_TEXT: 0, STATUS_BINARY: 0, STATUS_UNREADABLE: 0, STATUS_SKIPPED: 0}
    for path in paths:
        status = emit_file_block(path, out)
        counts[status] += 1
    return counts

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _write_content(path: str, out: TextIO) -> str:
    """Stream the file verbatim into `out`, substituting a placeholder on failure."""
    try:
        stream = stream_file_content(path)
        first = next(stream, "")
    except OSError as e:
        logger.warning(f"Could not read '{path}': {e}")
        out.write(UNREADABLE_PLACEHOLDER + "\n")
        return STATUS_UNREADABLE

    out.write(first)
    try:
        for chunk in stream:
            out.write(chunk)
    except OSError as e:
        logger.warning(f"Read of '{path}' interrupted: {e}")
        out.write(UNREADABLE_PLACEHOLDER + "\n")
        return STATUS_UNREADABLE

    return STATUS_TEXT
