from __future__ import annotations

"""
Directory Expansion and Ignore Rules.

Expands directory entries of the path list into the regular files they
contain, honoring gitignore-style `.repoignore` files. Rules come from the
user data directory (global) and from the expanded directory itself
(local); later rules override earlier ones.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from codexreport.domain.constants import REPOIGNORE_FILE
from codexreport.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# RULE MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class IgnoreRule:
    """
    A single compiled `.repoignore` line.

    Attributes:
        pattern: The glob with negation and surrounding slashes stripped.
        regex: Compiled translation of the glob.
        negated: True for '!' rules, which re-include a match.
        dir_only: True when the glob ended with '/'.
        anchored: True when the glob must match the full relative path.
    """
    pattern: str
    regex: re.Pattern
    negated: bool = False
    dir_only: bool = False
    anchored: bool = False

# -----------------------------------------------------------------------------
# RULE PARSING
# -----------------------------------------------------------------------------

def parse_ignore_line(line: str) -> Optional[IgnoreRule]:
    """
    Translate one gitignore-style line into a rule.

    Args:
        line: Raw line from an ignore file.

    Returns:
        Optional[IgnoreRule]: None for blank lines and comments.
    """
    text = line.strip()
    if not text or text.startswith("#"):
        return None

    negated = text.startswith("!")
    if negated:
        text = text[1:]

    dir_only = text.endswith("/")
    text = text.rstrip("/")

    anchored = "/" in text
    text = text.lstrip("/")
    if not text:
        return None

    return IgnoreRule(
        pattern=text,
        regex=re.compile(_gitignore_to_regex(text)),
        negated=negated,
        dir_only=dir_only,
        anchored=anchored,
    )


def _gitignore_to_regex(glob_pattern: str) -> str:
    """
    Translate a gitignore glob into a Python regex matching a whole path.

    `*`, `?` and bracket classes never cross a '/'. A `**` segment spans any
    number of directories: a leading `**/` is optional, a trailing `/**`
    matches everything inside, and `/**/` matches zero or more directories.

    Args:
        glob_pattern: Glob with negation and surrounding slashes removed.

    Returns:
        str: Regex string for use with `re.match`.
    """
    parts: List[str] = []
    i, n = 0, len(glob_pattern)

    while i < n:
        c = glob_pattern[i]

        if c == "*" and glob_pattern.startswith("**", i):
            end = i + 2
            whole_segment = (i == 0 or glob_pattern[i - 1] == "/") and (
                end == n or glob_pattern[end] == "/"
            )
            if whole_segment and end == n:
                parts.append(".*")
                i = end
            elif whole_segment:
                parts.append("(?:.*/)?")
                i = end + 1
            else:
                parts.append("[^/]*")
                i = end
            continue

        if c == "*":
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "[":
            close = glob_pattern.find("]", i + 2)
            if close == -1:
                parts.append(re.escape(c))
            else:
                body = glob_pattern[i + 1:close].replace("\\", "\\\\")
                if body[0] in "!^":
                    body = "^" + body[1:]
                parts.append(f"(?!/)[{body}]")
                i = close + 1
                continue
        elif c == "\\" and i + 1 < n:
            parts.append(re.escape(glob_pattern[i + 1]))
            i += 2
            continue
        else:
            parts.append(re.escape(c))
        i += 1

    return "(?s:" + "".join(parts) + r")\Z"


def load_repoignore_patterns(directory: str) -> List[IgnoreRule]:
    """
    Parse the `.repoignore` file located in `directory`, if any.

    Args:
        directory: Folder that may contain a `.repoignore` file.

    Returns:
        List[IgnoreRule]: Rules in file order. Empty when absent or unreadable.
    """
    ignore_path = os.path.join(directory, REPOIGNORE_FILE)
    if not os.path.isfile(ignore_path):
        return []

    rules: List[IgnoreRule] = []
    try:
        with open(ignore_path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                rule = parse_ignore_line(line)
                if rule:
                    rules.append(rule)
    except OSError as e:
        logger.warning(f"Could not read ignore file '{ignore_path}': {e}")
        return []

    logger.debug(f"Loaded {len(rules)} rule(s) from {ignore_path}")
    return rules


def is_ignored(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    """
    Decide whether a path relative to the expanded directory is ignored.

    The last matching rule wins; a negated rule re-includes the path.

    Args:
        rel_path: Path relative to the expanded directory, '/'-separated.
        is_dir: Whether the path is a directory.
        rules: Rules in precedence order (lowest first).

    Returns:
        bool: True if the path should be excluded.
    """
    name = rel_path.rsplit("/", 1)[-1]
    ignored = False

    for rule in rules:
        if rule.dir_only and not is_dir:
            continue
        target = rel_path if rule.anchored else name
        if rule.regex.match(target):
            ignored = not rule.negated

    return ignored

# -----------------------------------------------------------------------------
# DIRECTORY EXPANSION
# -----------------------------------------------------------------------------

def expand_directory(directory: str, rules: Sequence[IgnoreRule]) -> List[str]:
    """
    List the regular files below `directory`, skipping ignored entries.

    Traversal is sorted and does not follow symlinked directories. Ignored
    directories are pruned, so nothing below them is listed.

    Args:
        directory: Directory as written in the path list.
        rules: Ignore rules evaluated relative to `directory`.

    Returns:
        List[str]: File paths joined onto `directory`.
    """
    files: List[str] = []

    for root, dirs, names in os.walk(directory):
        rel_root = os.path.relpath(root, directory)
        rel_root = "" if rel_root == "." else rel_root.replace(os.sep, "/")

        dirs[:] = sorted(
            d for d in dirs if not is_ignored(_join_rel(rel_root, d), True, rules)
        )

        for file_name in sorted(names):
            full_path = os.path.join(root, file_name)
            if not os.path.isfile(full_path):
                continue
            if is_ignored(_join_rel(rel_root, file_name), False, rules):
                continue
            files.append(full_path)

    return files


def _join_rel(rel_root: str, entry: str) -> str:
    """Join a walk entry onto its '/'-separated relative root."""
    return f"{rel_root}/{entry}" if rel_root else entry


def expand_paths(
        paths: Sequence[str],
        respect_repoignore: bool = True,
        global_ignore_dir: Optional[str] = None,
) -> List[str]:
    """
    Insert the contents of every listed directory right after its entry.

    Listed entries are kept as written (duplicates included); expanded
    files already present earlier in the result are not repeated.

    Args:
        paths: Path list in input order.
        respect_repoignore: Apply global and local `.repoignore` rules.
        global_ignore_dir: Folder holding the global `.repoignore`.
                           Defaults to the user data directory.

    Returns:
        List[str]: The expanded path list.
    """
    global_rules: List[IgnoreRule] = []
    if respect_repoignore:
        global_rules = load_repoignore_patterns(global_ignore_dir or get_user_data_dir())

    result: List[str] = []
    seen: Set[str] = set()

    for path in paths:
        result.append(path)
        seen.add(os.path.normpath(path))

        if not os.path.isdir(path):
            continue

        rules = list(global_rules)
        if respect_repoignore:
            rules.extend(load_repoignore_patterns(path))

        added = 0
        for file_path in expand_directory(path, rules):
            key = os.path.normpath(file_path)
            if key in seen:
                continue
            seen.add(key)
            result.append(file_path)
            added += 1

        logger.info(f"Expanded directory '{path}' into {added} file(s)")

    return result
