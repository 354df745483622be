from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
domain configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from nestify.domain.constants import APP_VERSION, PARSE_ERROR_POLICIES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the nestify CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="nestify",
        description=(
            "Propose a directory layout where modules used by a single consumer "
            "are nested under it and shared modules move towards the root."
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Discovery ---
    p.add_argument(
        "-r", "--root",
        dest="root_path",
        default=None,
        help="Root path to analyze, defaulting to the working directory.",
    )
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated module extensions (default: .ts,.tsx,.js,.jsx).",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes of file or directory names to skip.",
    )
    p.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Ignore the root .gitignore rules.",
    )

    # --- Graph construction ---
    p.add_argument(
        "--on-parse-error",
        dest="on_parse_error",
        choices=PARSE_ERROR_POLICIES,
        default=None,
        help="Abort on unparseable files, or keep them isolated at their place.",
    )
    p.add_argument(
        "--reject-duplicates",
        action="store_true",
        help="Fail when the same file path is supplied twice.",
    )
    p.add_argument(
        "--max-visits",
        dest="max_visits",
        type=int,
        default=None,
        help="Relaxation visit budget (0 = proportional to the graph size).",
    )

    # --- Output ---
    p.add_argument("--tree", action="store_true", help="Print the proposed layout as a tree.")
    p.add_argument("--json", dest="json_output", action="store_true", help="Print the mapping as JSON.")
    p.add_argument("--moved-only", action="store_true", help="List only files whose path changes.")

    # --- Configuration and diagnostics ---
    p.add_argument("--use-defaults", action="store_true", help="Ignore the saved configuration.")
    p.add_argument("--dump-config", action="store_true", help="Print the effective configuration and exit.")
    p.add_argument("--save-config", action="store_true", help="Persist the effective configuration.")
    p.add_argument("--log-file", dest="log_file", default=None, help="Also write logs to this file.")
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration overrides dict.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["root_path"] = args.root_path
    overrides["on_parse_error"] = args.on_parse_error
    overrides["max_visits"] = args.max_visits

    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.exclude_patterns:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)
    if args.no_gitignore:
        overrides["respect_gitignore"] = False
    if args.reject_duplicates:
        overrides["reject_duplicates"] = True
    if args.tree:
        overrides["show_tree"] = True
    if args.moved_only:
        overrides["moved_only"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of sanitized strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
