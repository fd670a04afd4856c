from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from codexreport.domain.constants import APP_NAME, APP_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the codexreport CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Build a <codex> document holding a tree of the listed paths "
            "and the contents of every listed file."
        ),
    )

    p.add_argument(
        "list_file",
        metavar="path_to_file_list.txt",
        help="Newline-delimited list of file or directory paths.",
    )

    # --- Output ---
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the document to this file instead of standard output.",
    )

    # --- Input expansion ---
    p.add_argument(
        "--expand-dirs",
        action="store_true",
        help="Include the files found below every listed directory.",
    )
    p.add_argument(
        "--no-repoignore",
        action="store_true",
        help="Do not apply .repoignore rules while expanding directories.",
    )

    # --- Metrics ---
    p.add_argument(
        "--tokens",
        action="store_true",
        help="Report an estimated token count of the document on stderr.",
    )
    p.add_argument(
        "--model",
        dest="target_model",
        default=None,
        help="Model whose tokenizer is used for --tokens (default: gpt-4o).",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only options that were actually given produce an override.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.output_path:
        overrides["output_path"] = args.output_path
    if args.expand_dirs:
        overrides["expand_dirs"] = True
    if args.no_repoignore:
        overrides["respect_repoignore"] = False
    if args.tokens:
        overrides["count_tokens"] = True
    if args.target_model:
        overrides["target_model"] = args.target_model
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
