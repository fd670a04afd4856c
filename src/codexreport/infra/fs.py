from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path resolution for persistent application data, the live
filesystem probe consulted by the tree builder, and safe helpers to read
the path list and prepare output destinations.
"""

import os
from typing import List, Optional, Tuple

from codexreport.domain.constants import CONTENT_ERRORS

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "codexreport"
UNIX_APP_DIR_NAME = ".codexreport"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/codexreport
    - Linux/Mac: ~/.codexreport

    The directory is not created; callers only read from it.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def get_config_path() -> str:
    """Return the location of the persisted JSON configuration."""
    return os.path.join(get_user_data_dir(), "config.json")

# -----------------------------------------------------------------------------
# LIVE FILESYSTEM PROBE
# -----------------------------------------------------------------------------

class LocalPathProbe:
    """
    Answers existence and type questions against the real filesystem.

    The tree builder depends on this small surface only, so tests can
    substitute an in-memory probe.
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

# -----------------------------------------------------------------------------
# INPUT / OUTPUT HELPERS
# -----------------------------------------------------------------------------

def read_path_list(list_path: str) -> List[str]:
    """
    Read a newline-delimited list of candidate paths.

    Blank lines are skipped. Lines are otherwise kept verbatim, apart from
    the line terminator (including a trailing carriage return).

    Args:
        list_path: Path to the list file.

    Returns:
        List[str]: Candidate paths in file order.

    Raises:
        OSError: If the list file cannot be opened or read.
    """
    paths: List[str] = []
    with open(list_path, "r", encoding="utf-8", errors=CONTENT_ERRORS, newline="") as f:
        for raw in f:
            line = raw.rstrip("\n").rstrip("\r")
            if line:
                paths.append(line)
    return paths


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    if not path:
        return True, None
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def ensure_parent_dir(file_path: str) -> Tuple[bool, Optional[str]]:
    """Create the parent directory of `file_path` if it is missing."""
    return safe_mkdir(os.path.dirname(os.path.abspath(file_path)))
