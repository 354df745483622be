from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the whole reorganization workflow:
1. Validates configuration and the project root.
2. Discovers and reads the module files.
3. Builds the dependency graph and resolves ownership.
4. Realizes the proposed paths and optionally renders them as a tree.
"""

import logging
import os
from typing import Any, Dict, Optional

from nestify.core.analysis.import_parser import extract_imports as default_extractor
from nestify.core.analysis.layout_renderer import render_mapping_tree
from nestify.core.graph.builder import build_layout
from nestify.core.pipeline.validator import validate_config
from nestify.core.services.scanner import (
    prepare_exclusions,
    read_source_files,
    to_posix,
    yield_source_files,
)
from nestify.domain.errors import NestifyError
from nestify.domain.graph_models import ImportExtractor
from nestify.domain.pipeline_models import (
    ReorganizeResult,
    create_error_result,
    create_success_result,
)
from nestify.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        extract_imports: Optional[ImportExtractor] = None,
) -> ReorganizeResult:
    """
    Compute the proposed layout of a project directory.

    Fatal graph errors (parse failures under the 'abort' policy, duplicate
    paths, resolver invariant violations) are reported through a failed
    result; no partial mapping is returned.

    Args:
        config: The configuration dictionary (raw or partial).
        extract_imports: Import extractor override, tree-sitter by default.

    Returns:
        ReorganizeResult: Object containing status, mapping and statistics.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    root_path = normalize_path(cfg["root_path"], os.getcwd())
    if not os.path.isdir(root_path):
        msg = f"Invalid root directory: {root_path}"
        logger.error(msg)
        return create_error_result(msg, root_path)

    # -------------------------------------------------------------------------
    # 2) Discovery
    # -------------------------------------------------------------------------
    exclude_rx = prepare_exclusions(root_path, cfg["exclude_patterns"], cfg["respect_gitignore"])
    paths = list(yield_source_files(root_path, cfg["extensions"], exclude_rx))
    files, unreadable = read_source_files(paths)
    logger.info(f"Discovered {len(files)} module files under {root_path}")

    # -------------------------------------------------------------------------
    # 3) Graph, Ownership and Realization
    # -------------------------------------------------------------------------
    try:
        graph = build_layout(
            to_posix(root_path),
            files,
            extract_imports or default_extractor,
            on_parse_error=cfg["on_parse_error"],
            reject_duplicates=cfg["reject_duplicates"],
            max_visits=cfg["max_visits"],
        )
    except NestifyError as e:
        logger.error(f"Layout computation failed: {e}")
        return create_error_result(str(e), root_path, summary_extra={"files": len(files)})

    # -------------------------------------------------------------------------
    # 4) Rendering & Summary
    # -------------------------------------------------------------------------
    tree_lines = render_mapping_tree(graph.updated_paths, graph.root_path) if cfg["show_tree"] else []

    summary = {
        "files": len(graph.nodes),
        "edges": len(graph.edges),
        "entry_points": len(graph.entry_points()),
        "moved": len(graph.moved_paths()),
        "unresolved": len(graph.unresolved),
        "isolated": len(graph.isolated),
        "unreadable": len(unreadable),
    }
    logger.info(f"Pipeline finished: {summary['moved']} of {summary['files']} files would move.")

    return create_success_result(
        root_path=graph.root_path,
        mapping=graph.updated_paths,
        unresolved=graph.unresolved,
        isolated=graph.isolated,
        unreadable=unreadable,
        tree_lines=tree_lines,
        summary_extra=summary,
    )
