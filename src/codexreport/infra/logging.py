from __future__ import annotations

"""
Logging Infrastructure.

Sets up the root logger for one command line run: a console handler on
stderr and, optionally, a size-rotated log file. Handlers write
synchronously, so log lines keep their order relative to the diagnostics
the CLI prints to stderr itself.

Only handlers created here are ever replaced or removed; handlers installed
by a host application (or a test runner) are left alone.
"""

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import List, Optional

_OWNED_MARK = "_codexreport_owned"
_CONFIGURED_MARK = "_codexreport_configured"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings resolved from the application configuration.

    Attributes:
        level: Level name ("DEBUG", "INFO", ...). Unknown names mean WARNING.
        console: Attach the stderr handler.
        log_file: Path of the rotating log file, or None for no file.
        max_bytes: Size that triggers a rollover of the log file.
        backup_count: Rolled-over files kept next to the log file.
        console_fmt: Record format on stderr.
        file_fmt: Record format in the log file.
        datefmt: Timestamp format in the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the console and file handlers to the root logger.

    Calling it again is a no-op unless `force` is set, in which case the
    handlers from the previous call are closed and replaced.

    Args:
        cfg: Logging settings.
        force: Replace an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_MARK, False) and not force:
        return root

    level = _resolve_level(cfg.level)
    _detach_owned_handlers(root)

    problem = ""
    try:
        handlers = _build_handlers(cfg, level)
    except (ValueError, TypeError) as e:
        # Invalid format string: fall back to the stock console handler
        handlers = _build_handlers(LoggingConfig(level=cfg.level), level)
        problem = f"Invalid logging format ({e}); using the default console format."

    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)
    setattr(root, _CONFIGURED_MARK, True)

    if problem:
        root.warning(problem)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return the logger for `name` (usually the module's __name__)."""
    return logging.getLogger(name)

# -----------------------------------------------------------------------------
# HANDLER CONSTRUCTION
# -----------------------------------------------------------------------------

def _build_handlers(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    """Create the handlers requested by `cfg`, all set to `level`."""
    handlers: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        handlers.append(console)

    if cfg.log_file:
        log_file = _open_log_file(cfg)
        if log_file is not None:
            log_file.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            handlers.append(log_file)

    for handler in handlers:
        handler.setLevel(level)
        _own(handler)
    return handlers


def _open_log_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """Open the rotating log file, or warn on stderr and return None."""
    path = os.path.abspath(cfg.log_file or "")
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"WARNING: Log file '{cfg.log_file}' unavailable: {e}", file=sys.stderr)
        return None

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _resolve_level(name: str) -> int:
    """Map a level name to its number; unknown or empty names give WARNING."""
    value = logging.getLevelName(str(name or "").strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def _own(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED_MARK, True)
    return handler


def _detach_owned_handlers(root: logging.Logger) -> None:
    """Close and remove the handlers a previous call attached."""
    for handler in list(root.handlers):
        if getattr(handler, _OWNED_MARK, False):
            root.removeHandler(handler)
            handler.close()
    setattr(root, _CONFIGURED_MARK, False)
