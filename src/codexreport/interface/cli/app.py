from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, resolution of the
configuration hierarchy (defaults, persistent storage, CLI overrides),
logging bootstrap, report generation, and rendering of diagnostics on
the error stream.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from codexreport.core.pipeline.engine import generate_report
from codexreport.core.pipeline.validator import validate_config
from codexreport.domain.config import CONFIG_KEYS, get_default_config, load_config
from codexreport.domain.constants import CONTENT_ERRORS, MISSING_PATH_WARNING
from codexreport.domain.pipeline_models import ReportResult
from codexreport.infra.logging import LoggingConfig, configure_logging, get_logger
from codexreport.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, 1 for fatal errors).
    """
    # Document bytes that are not valid UTF-8 arrive as surrogate escapes
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors=CONTENT_ERRORS)
    if sys.platform == "win32" and hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase (usage errors map to exit code 1)
    parser = cli_args.build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return 0 if e.code in (0, None) else 1

    # 2. Resolve configuration (Default vs Persistent state + overrides)
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig(
        level=clean_conf["log_level"],
        console=True,
        log_file=clean_conf["log_file"] or None,
    ))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 4. Report generation phase
    out = None if clean_conf["output_path"] else sys.stdout
    try:
        result = generate_report(args.list_file, out=out, config=clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical(f"Report generation failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    # 5. Diagnostics rendering phase
    return _report_diagnostics(result)

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in CONFIG_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (ERROR STREAM)
# -----------------------------------------------------------------------------

def _report_diagnostics(result: ReportResult) -> int:
    """
    Print per-path warnings and the run outcome to stderr.

    Args:
        result: The report result to render.

    Returns:
        int: Exit code for the run.
    """
    for path in result.missing_paths:
        print(MISSING_PATH_WARNING.format(path=path), file=sys.stderr)

    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1

    summary = result.summary
    if "tokens" in summary:
        print(f"Estimated tokens: {summary['tokens']:,} ({summary['token_method']})", file=sys.stderr)

    logger.info(
        f"Done: {summary.get('emitted', 0)} file block(s), "
        f"{summary.get('missing', 0)} missing path(s)."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
