from __future__ import annotations

"""
Domain Constants.

Centralizes the fixed markup of the generated document, placeholder texts,
and the thresholds used by the content pipeline.
"""

APP_NAME = "codexreport"
APP_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# DOCUMENT MARKUP
# -----------------------------------------------------------------------------
DOCUMENT_OPEN = "<codex>"
DOCUMENT_CLOSE = "</codex>"
FILE_MAP_OPEN = "<file_map>"
FILE_MAP_CLOSE = "</file_map>"
FILE_CONTENTS_OPEN = "<file_contents>"
FILE_CONTENTS_CLOSE = "</file_contents>"
FILE_BLOCK_OPEN = '<file path="{path}">'
FILE_BLOCK_CLOSE = "</file>"
CODE_FENCE = "```"

# -----------------------------------------------------------------------------
# TREE CONNECTORS
# -----------------------------------------------------------------------------
BRANCH = "├── "
CORNER = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "

# -----------------------------------------------------------------------------
# CONTENT PIPELINE
# -----------------------------------------------------------------------------
BINARY_SNIFF_BYTES = 1024
# Error handler shared by content reads and document writes (byte-exact copy)
CONTENT_ERRORS = "surrogateescape"
DEFAULT_LANGUAGE_HINT = "text"
BINARY_PLACEHOLDER = "[Binary file]"
UNREADABLE_PLACEHOLDER = "[Could not read file]"

# Leading segments dropped before the root name is taken
ROOT_MARKERS = (".", "/")

REPOIGNORE_FILE = ".repoignore"
MISSING_PATH_WARNING = "Warning: Path does not exist and will be skipped: {path}"
LIST_OPEN_ERROR = "Error: Could not open file: {path}"
