from __future__ import annotations

"""
Project Graph Data Models.

Arena-style representation of a module dependency graph: nodes live in a
list and refer to each other by integer index, so ownership is acyclic and
the whole structure serializes to plain dictionaries.
"""

import posixpath
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from nestify.domain.errors import UnresolvedImport

ImportExtractor = Callable[[str, str], List[str]]


# -----------------------------------------------------------------------------
# INPUT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceFile:
    """
    One input file handed to the graph builder.

    Attributes:
        path: Absolute path of the file.
        body: Full source text.
    """
    path: str
    body: str


# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class FileNode:
    """
    A source file inside the project graph.

    Attributes:
        index: Position of the node in ProjectGraph.nodes.
        original_path: Absolute, normalized path; unique within a graph.
        original_body: Source text the node was created from.
        dependencies: Indices of the files this file imports.
        dependents: Indices of the files importing this file.
        owner: Index of the node this file is placed under, None for the root.
        depth: Distance from the virtual super-root, None while unvisited.
    """
    index: int
    original_path: str
    original_body: str
    dependencies: Set[int] = field(default_factory=set)
    dependents: Set[int] = field(default_factory=set)
    owner: Optional[int] = None
    depth: Optional[int] = None

    @property
    def basename(self) -> str:
        return posixpath.basename(self.original_path)

    @property
    def stem(self) -> str:
        """Basename without any extension ('index.d.ts' -> 'index')."""
        name = self.basename
        return name.split(".", 1)[0] or name


@dataclass(frozen=True)
class DependencyEdge:
    """
    One resolved import.

    Attributes:
        dependency: Index of the imported file (head).
        dependent: Index of the importing file (tail).
        literal: Specifier text as written in the importing file.
    """
    dependency: int
    dependent: int
    literal: str


@dataclass
class ProjectGraph:
    """
    Complete dependency graph of a project plus its proposed layout.

    Built once by build_project_graph; afterwards only the ownership fields
    of the nodes and the updated_paths mapping are written.
    """
    root_path: str
    nodes: List[FileNode] = field(default_factory=list)
    edges: List[DependencyEdge] = field(default_factory=list)
    index_by_path: Dict[str, int] = field(default_factory=dict)
    unresolved: List[UnresolvedImport] = field(default_factory=list)
    isolated: List[str] = field(default_factory=list)
    updated_paths: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_files(
            cls,
            root_path: str,
            files: Iterable[SourceFile],
            extract_imports: ImportExtractor,
            **options: Any,
    ) -> ProjectGraph:
        """Build, resolve and realize a graph in one call."""
        from nestify.core.graph.builder import build_layout

        return build_layout(root_path, files, extract_imports, **options)

    def node_for(self, path: str) -> Optional[FileNode]:
        index = self.index_by_path.get(path)
        return None if index is None else self.nodes[index]

    def entry_points(self) -> List[FileNode]:
        """
        Representatives of the entry components.

        An entry component has no dependents outside itself, so a pure
        import cycle or a self-importing file still counts as one entry.
        """
        from nestify.core.graph.components import contract

        dag = contract(self)
        return [self.nodes[dag.representative[c]] for c in range(len(dag)) if not dag.dependents[c]]

    def owned_by(self, owner: Optional[int]) -> List[FileNode]:
        return [n for n in self.nodes if n.owner == owner]

    def moved_paths(self) -> Dict[str, str]:
        return {k: v for k, v in self.updated_paths.items() if k != v}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root_path": self.root_path,
            "nodes": [
                {
                    "path": n.original_path,
                    "dependencies": sorted(n.dependencies),
                    "dependents": sorted(n.dependents),
                    "owner": n.owner,
                    "depth": n.depth,
                }
                for n in self.nodes
            ],
            "edges": [[e.dependency, e.dependent, e.literal] for e in self.edges],
            "updated_paths": dict(self.updated_paths),
        }
