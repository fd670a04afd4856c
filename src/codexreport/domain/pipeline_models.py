from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object returned by the report engine to the interface
layer, together with its factory functions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportResult:
    """
    Outcome of a complete report generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        list_path: The path list file that drove the run.
        output_path: Destination file, or empty when written to a stream.
        document: Full document text when it was buffered in memory.
        tree_lines: Rendered lines of the file map.
        missing_paths: Listed paths that did not exist at build time.
        summary: Execution counters (listed, inserted, emitted, ...).
    """
    ok: bool
    error: str

    list_path: str
    output_path: str = ""
    document: str = ""

    tree_lines: List[str] = field(default_factory=list)
    missing_paths: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        list_path: str,
        output_path: str = "",
        missing_paths: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ReportResult:
    """
    Create a failed report result instance.

    Args:
        error: Detailed error description.
        list_path: The path list file that was requested.
        output_path: Requested output file, if any.
        missing_paths: Listed paths already found missing before the failure.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        ReportResult: An immutable error result object.
    """
    return ReportResult(
        ok=False,
        error=error,
        list_path=list_path,
        output_path=output_path,
        missing_paths=missing_paths or [],
        summary=summary_extra or {},
    )


def create_success_result(
        list_path: str,
        output_path: str = "",
        document: str = "",
        tree_lines: Optional[List[str]] = None,
        missing_paths: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ReportResult:
    """Create a successful report result instance."""
    return ReportResult(
        ok=True,
        error="",
        list_path=list_path,
        output_path=output_path,
        document=document,
        tree_lines=tree_lines or [],
        missing_paths=missing_paths or [],
        summary=summary_extra or {},
    )
