from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures to lay out sample project trees and path lists.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Dict[str, Union[str, bytes, None]]], Path]:
    """
    Return a factory that materializes files below `tmp_path`.

    Keys are '/'-separated relative paths. A value of None creates a
    directory, bytes are written verbatim and str is written as UTF-8.
    """
    def _make(entries: Dict[str, Union[str, bytes, None]]) -> Path:
        for rel, content in entries.items():
            target = tmp_path / rel
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def write_list(tmp_path: Path) -> Callable[[List[str]], Path]:
    """Return a factory that writes a newline-delimited path list file."""
    def _write(lines: List[str], name: str = "paths.txt") -> Path:
        list_file = tmp_path / name
        list_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return list_file

    return _write


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with `tmp_path` as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
