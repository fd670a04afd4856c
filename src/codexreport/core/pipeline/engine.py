from __future__ import annotations

"""
Core report pipeline.

This module coordinates the whole report generation run:
1. Validates configuration.
2. Reads the path list (optionally expanding listed directories).
3. Builds the path forest from the entries that exist.
4. Renders the file map.
5. Streams the document (file map + content blocks) to its destination.
6. Optionally estimates the token size of the document.

The engine never prints diagnostics itself; missing paths and failures are
reported through the returned ReportResult.
"""

import io
import logging
from typing import Any, Dict, List, Optional, TextIO

from codexreport.core.analysis.tree_generator import PathProbe, build_forest
from codexreport.core.analysis.tree_renderer import render_forest
from codexreport.core.pipeline.components.filters import expand_paths
from codexreport.core.pipeline.components.writer import (
    STATUS_BINARY,
    STATUS_SKIPPED,
    STATUS_TEXT,
    STATUS_UNREADABLE,
    emit_file_contents,
)
from codexreport.core.pipeline.validator import validate_config
from codexreport.core.processing.tokenizer import estimate_tokens
from codexreport.domain.constants import (
    DOCUMENT_CLOSE,
    DOCUMENT_OPEN,
    FILE_CONTENTS_CLOSE,
    FILE_CONTENTS_OPEN,
    FILE_MAP_CLOSE,
    FILE_MAP_OPEN,
    CONTENT_ERRORS,
    LIST_OPEN_ERROR,
)
from codexreport.domain.pipeline_models import (
    ReportResult,
    create_error_result,
    create_success_result,
)
from codexreport.infra.fs import ensure_parent_dir, read_path_list

logger = logging.getLogger(__name__)


def generate_report(
        list_path: str,
        out: Optional[TextIO] = None,
        config: Optional[Dict[str, Any]] = None,
        probe: Optional[PathProbe] = None,
) -> ReportResult:
    """
    Generate the report document for the paths listed in `list_path`.

    Destination rules: a configured `output_path` wins; otherwise the
    document is streamed to `out`; when neither is given it is buffered
    and returned in `ReportResult.document`.

    Args:
        list_path: Newline-delimited file of candidate paths.
        out: Optional destination text stream (e.g. sys.stdout).
        config: Raw configuration dictionary (validated here).
        probe: Filesystem collaborator for the tree builder.

    Returns:
        ReportResult: Status, rendered tree, missing paths and counters.
    """
    cfg, warnings = validate_config(config or {}, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    output_path = cfg["output_path"]

    # -------------------------------------------------------------------------
    # 1) Path list
    # -------------------------------------------------------------------------
    try:
        listed = read_path_list(list_path)
    except OSError as e:
        logger.debug(f"Path list unreadable: {e}")
        return create_error_result(LIST_OPEN_ERROR.format(path=list_path), list_path, output_path)

    logger.info(f"Read {len(listed)} path(s) from {list_path}")

    paths = listed
    if cfg["expand_dirs"]:
        paths = expand_paths(listed, respect_repoignore=cfg["respect_repoignore"])

    # -------------------------------------------------------------------------
    # 2) Forest and file map
    # -------------------------------------------------------------------------
    forest, missing = build_forest(paths, probe)
    tree_lines = render_forest(forest)

    # -------------------------------------------------------------------------
    # 3) Document emission
    # -------------------------------------------------------------------------
    document = ""
    token_source = ""

    if output_path:
        ok, err = ensure_parent_dir(output_path)
        if not ok:
            return create_error_result(
                f"Error: Could not create output directory for {output_path}: {err}",
                list_path,
                output_path,
                missing_paths=missing,
            )
        try:
            with open(output_path, "w", encoding="utf-8", errors=CONTENT_ERRORS, newline="") as f:
                counts = write_document(f, tree_lines, paths)
            if cfg["count_tokens"]:
                with open(output_path, "r", encoding="utf-8", errors=CONTENT_ERRORS, newline="") as f:
                    token_source = f.read()
        except OSError as e:
            return create_error_result(
                f"Error: Could not write output file: {output_path} ({e})",
                list_path,
                output_path,
                missing_paths=missing,
            )
        logger.info(f"Report written to {output_path}")
    else:
        buffered = out is None or cfg["count_tokens"]
        sink: TextIO = io.StringIO() if buffered else out  # type: ignore[assignment]
        counts = write_document(sink, tree_lines, paths)

        if buffered:
            text = sink.getvalue()  # type: ignore[attr-defined]
            token_source = text
            if out is None:
                document = text
            else:
                out.write(text)
                out.flush()

    # -------------------------------------------------------------------------
    # 4) Metrics
    # -------------------------------------------------------------------------
    summary: Dict[str, Any] = {
        "listed": len(listed),
        "expanded": len(paths) - len(listed),
        "inserted": len(paths) - len(missing),
        "missing": len(missing),
        "emitted": counts[STATUS_TEXT] + counts[STATUS_BINARY] + counts[STATUS_UNREADABLE],
        "binary": counts[STATUS_BINARY],
        "unreadable": counts[STATUS_UNREADABLE],
        "skipped": counts[STATUS_SKIPPED],
    }

    if cfg["count_tokens"]:
        estimate = estimate_tokens(token_source, cfg["target_model"])
        summary["tokens"] = estimate.count
        summary["token_method"] = estimate.method

    logger.debug(f"Report summary: {summary}")

    return create_success_result(
        list_path,
        output_path=output_path,
        document=document,
        tree_lines=tree_lines,
        missing_paths=missing,
        summary_extra=summary,
    )


def write_document(out: TextIO, tree_lines: List[str], paths: List[str]) -> Dict[str, int]:
    """
    Write the complete document structure to `out`.

    Args:
        out: Destination text stream.
        tree_lines: Rendered file map lines.
        paths: Full path list (including missing entries) in input order.

    Returns:
        Dict[str, int]: Emission counts per status.
    """
    out.write(DOCUMENT_OPEN + "\n")

    out.write(FILE_MAP_OPEN + "\n")
    for line in tree_lines:
        out.write(line + "\n")
    out.write(FILE_MAP_CLOSE + "\n")

    out.write(FILE_CONTENTS_OPEN + "\n")
    counts = emit_file_contents(paths, out)
    out.write(FILE_CONTENTS_CLOSE + "\n")

    out.write(DOCUMENT_CLOSE + "\n")
    return counts
