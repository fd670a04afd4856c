from __future__ import annotations

"""
Resilient File Reading Component.

Provides binary detection and streaming reads of file content. Bytes that
are not valid UTF-8 are carried as surrogate escapes, so a stream encoding
with the same error handler reproduces the original bytes exactly.
"""

from typing import Iterator

from codexreport.domain.constants import BINARY_SNIFF_BYTES, CONTENT_ERRORS

_READ_CHUNK_SIZE = 64 * 1024

# -----------------------------------------------------------------------------
# BINARY DETECTION
# -----------------------------------------------------------------------------

def is_binary_file(file_path: str, sniff_bytes: int = BINARY_SNIFF_BYTES) -> bool:
    """
    Classify a file as binary by looking for a null byte in its prefix.

    Only the first `sniff_bytes` bytes are inspected, so nulls further in
    are not detected.

    Args:
        file_path: Path to the file.
        sniff_bytes: Size of the inspected prefix.

    Returns:
        bool: True if a null byte was found. False if the file is empty,
              cannot be opened, or has no null byte in the prefix.
    """
    try:
        with open(file_path, "rb") as f:
            head = f.read(sniff_bytes)
    except OSError:
        return False
    return b"\x00" in head

# -----------------------------------------------------------------------------
# STREAM READING OPERATIONS
# -----------------------------------------------------------------------------

def stream_file_content(file_path: str) -> Iterator[str]:
    """
    Generate the file content in decoded chunks.

    Content is passed through verbatim: line endings are not translated and
    invalid byte sequences become surrogate escapes (`CONTENT_ERRORS`).

    Args:
        file_path: Path to the target file.

    Yields:
        str: Consecutive chunks of the file content.

    Raises:
        OSError: If the file cannot be opened; callers decide how to report it.
    """
    with open(file_path, "r", encoding="utf-8", errors=CONTENT_ERRORS, newline="") as f:
        while True:
            chunk = f.read(_READ_CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
