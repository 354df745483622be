from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, saved session, command-line overrides), pipeline
execution and rendering of the proposed mapping.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from nestify.core.pipeline.engine import run_pipeline
from nestify.core.pipeline.validator import validate_config
from nestify.domain.config import get_default_config, load_config, save_config
from nestify.domain.pipeline_models import ReorganizeResult
from nestify.infra.logging import LoggingConfig, configure_logging, get_logger
from nestify.interface.cli import args as cli_args

logger = get_logger(__name__)

_MERGEABLE_KEYS = (
    "root_path", "extensions", "exclude_patterns", "respect_gitignore",
    "on_parse_error", "reject_duplicates", "max_visits", "show_tree", "moved_only",
)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad root, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(args.debug, args.log_file))

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    root_path = clean_conf["root_path"]
    if not os.path.isdir(root_path):
        msg = f"Root path does not exist or is not a directory: {root_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    if args.save_config:
        save_config(clean_conf)

    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps(_select(result, clean_conf["moved_only"]), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, clean_conf["moved_only"])

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge known, non-None override values into the base configuration."""
    out = dict(base)
    for k in _MERGEABLE_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _select(result: ReorganizeResult, moved_only: bool) -> Dict[str, str]:
    return result.moved if moved_only else result.mapping


def _print_human_summary(result: ReorganizeResult, moved_only: bool) -> None:
    """
    Print the mapping, optional tree preview and diagnostics to stdout.

    Args:
        result: Successful pipeline result.
        moved_only: Restrict the listing to files whose path changes.
    """
    for original, proposed in _select(result, moved_only).items():
        print(f"{original} -> {proposed}")

    if result.tree_lines:
        print()
        print("\n".join(result.tree_lines))

    if result.unresolved:
        print()
        print(f"Unresolved imports: {len(result.unresolved)}")
        for item in result.unresolved:
            print(f"  - {item.importer}: '{item.specifier}' ({item.reason})")

    if result.isolated:
        print()
        print(f"Unparseable files kept in place: {len(result.isolated)}")
        for path in result.isolated:
            print(f"  - {path}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
