from __future__ import annotations

"""
Dependency Graph Builder.

Creates one node per input file, asks the import extractor for each body's
static import specifiers and turns every local specifier that resolves to a
known in-root file into a bidirectional dependency edge.
"""

import logging
import posixpath
from typing import Dict, Iterable, List

from nestify.core.graph.ownership import resolve_ownership
from nestify.core.graph.realizer import realize_paths
from nestify.core.resolution.path_resolver import (
    find_dependency,
    is_local_specifier,
    is_within_root,
    normalize,
    resolve_specifier,
)
from nestify.domain.constants import PARSE_ERROR_POLICIES
from nestify.domain.errors import DuplicatePathError, ParseFailure, UnresolvedImport
from nestify.domain.graph_models import (
    DependencyEdge,
    FileNode,
    ImportExtractor,
    ProjectGraph,
    SourceFile,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_project_graph(
        root_path: str,
        files: Iterable[SourceFile],
        extract_imports: ImportExtractor,
        *,
        on_parse_error: str = "abort",
        reject_duplicates: bool = False,
) -> ProjectGraph:
    """
    Construct the dependency graph of a project.

    Unresolved local imports are not fatal: they are logged and recorded on
    graph.unresolved. A parse failure aborts the whole build unless
    on_parse_error is 'isolate', in which case the file stays in the graph
    without dependencies.

    Args:
        root_path: Project root; imports resolving outside it are dropped.
        files: Input (path, body) records.
        extract_imports: Callable returning the ordered import specifiers of a body.
        on_parse_error: 'abort' or 'isolate'.
        reject_duplicates: Raise DuplicatePathError instead of keeping the last entry.

    Returns:
        ProjectGraph: Graph with nodes and edges; ownership not yet resolved.

    Raises:
        ParseFailure: A body could not be parsed and the policy is 'abort'.
        DuplicatePathError: A path was repeated and reject_duplicates is set.
    """
    if on_parse_error not in PARSE_ERROR_POLICIES:
        raise ValueError(f"Unknown parse error policy: {on_parse_error!r}")

    graph = ProjectGraph(root_path=normalize(root_path))

    # 1. Node table, scoped to this build
    bodies: Dict[str, str] = {}
    for source in files:
        path = normalize(source.path)
        if path in bodies:
            if reject_duplicates:
                raise DuplicatePathError(path, "file supplied more than once")
            logger.warning(f"Duplicate input path {path}; keeping the last entry.")
        bodies[path] = source.body

    for path, body in bodies.items():
        index = len(graph.nodes)
        graph.nodes.append(FileNode(index=index, original_path=path, original_body=body))
        graph.index_by_path[path] = index

    # 2. Import extraction and edge creation
    for node in graph.nodes:
        logger.debug(f"Scanning {node.original_path}")
        try:
            specifiers = _extract(extract_imports, node)
        except ParseFailure as e:
            if on_parse_error == "abort":
                raise
            logger.warning(f"Isolating unparseable file {e.path}: {e.reason}")
            graph.isolated.append(node.original_path)
            continue

        _link_dependencies(graph, node, specifiers)

    logger.debug(
        f"Graph built: {len(graph.nodes)} files, {len(graph.edges)} edges, "
        f"{len(graph.unresolved)} unresolved imports."
    )
    return graph


def build_layout(
        root_path: str,
        files: Iterable[SourceFile],
        extract_imports: ImportExtractor,
        *,
        on_parse_error: str = "abort",
        reject_duplicates: bool = False,
        max_visits: int = 0,
) -> ProjectGraph:
    """
    Build the graph, resolve ownership and realize the proposed paths.

    Returns:
        ProjectGraph: Graph whose updated_paths holds the rename mapping.
    """
    graph = build_project_graph(
        root_path,
        files,
        extract_imports,
        on_parse_error=on_parse_error,
        reject_duplicates=reject_duplicates,
    )
    resolve_ownership(graph, max_visits=max_visits)
    realize_paths(graph)
    return graph


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _extract(extract_imports: ImportExtractor, node: FileNode) -> List[str]:
    """Call the extractor, normalizing any failure into ParseFailure."""
    try:
        return list(extract_imports(node.original_body, node.original_path))
    except ParseFailure:
        raise
    except Exception as e:
        raise ParseFailure(node.original_path, str(e) or type(e).__name__) from e


def _link_dependencies(graph: ProjectGraph, node: FileNode, specifiers: List[str]) -> None:
    """Resolve the local specifiers of a node and add the matching edges."""
    importer_dir = posixpath.dirname(node.original_path)
    seen = set()

    for specifier in specifiers:
        if specifier in seen:
            continue
        seen.add(specifier)

        if not is_local_specifier(specifier):
            continue

        resolved = resolve_specifier(specifier, importer_dir)
        if not is_within_root(resolved, graph.root_path):
            _record_unresolved(graph, node, specifier, resolved, "outside_root")
            continue

        index = find_dependency(resolved, graph.index_by_path)
        if index is None:
            _record_unresolved(graph, node, specifier, resolved, "not_found")
            continue

        if index in node.dependencies:
            continue

        dependency = graph.nodes[index]
        node.dependencies.add(index)
        dependency.dependents.add(node.index)
        graph.edges.append(DependencyEdge(index, node.index, specifier))
        logger.debug(f"  {specifier} -> {dependency.original_path}")


def _record_unresolved(
        graph: ProjectGraph,
        node: FileNode,
        specifier: str,
        resolved: str,
        reason: str,
) -> None:
    logger.warning(f"Could not resolve import '{specifier}' from {node.original_path} ({reason})")
    graph.unresolved.append(UnresolvedImport(node.original_path, specifier, resolved, reason))
