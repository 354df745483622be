from __future__ import annotations

"""
Unit tests for the Proposed Path Realizer.

Ownership is assigned by hand so the realizer is exercised in isolation.
"""

from typing import Dict, Optional

from nestify.core.graph.builder import build_project_graph
from nestify.core.graph.realizer import realize_paths
from nestify.domain.graph_models import ProjectGraph, SourceFile


def _graph(root: str, owners: Dict[str, Optional[str]]) -> ProjectGraph:
    graph = build_project_graph(root, [SourceFile(p, "") for p in owners], lambda body, path: [])
    for path, owner in owners.items():
        node = graph.node_for(path)
        node.owner = None if owner is None else graph.index_by_path[owner]
    for node in graph.nodes:
        depth, current = 0, node.owner
        while current is not None:
            depth += 1
            current = graph.nodes[current].owner
        node.depth = depth
    return graph


def test_nested_chain_uses_owner_stems() -> None:
    graph = _graph("/home/user/src/", {
        "/home/user/src/index.ts": None,
        "/home/user/src/child.ts": "/home/user/src/index.ts",
        "/home/user/src/hack.ts": "/home/user/src/child.ts",
    })

    mapping = realize_paths(graph)

    assert mapping == {
        "/home/user/src/index.ts": "/home/user/src/index.ts",
        "/home/user/src/child.ts": "/home/user/src/index/child.ts",
        "/home/user/src/hack.ts": "/home/user/src/index/child/hack.ts",
    }
    assert graph.updated_paths == mapping


def test_root_slash_is_not_doubled() -> None:
    graph = _graph("/", {"/src/tool.ts": None, "/src/lib.ts": "/src/tool.ts"})

    assert realize_paths(graph) == {
        "/src/tool.ts": "/tool.ts",
        "/src/lib.ts": "/tool/lib.ts",
    }


def test_directory_name_strips_every_extension() -> None:
    graph = _graph("/p", {
        "/p/api/index.d.ts": None,
        "/p/api/model.ts": "/p/api/index.d.ts",
    })

    assert realize_paths(graph)["/p/api/model.ts"] == "/p/index/model.ts"


def test_unvisited_nodes_default_to_root() -> None:
    graph = build_project_graph("/p", [SourceFile("/p/x/a.ts", "")], lambda body, path: [])

    assert graph.nodes[0].depth is None
    assert realize_paths(graph) == {"/p/x/a.ts": "/p/a.ts"}


def test_every_node_mapped_once_in_tree_order() -> None:
    graph = _graph("/p", {
        "/p/b.ts": None,
        "/p/a.ts": None,
        "/p/c.ts": "/p/b.ts",
    })

    mapping = realize_paths(graph)

    assert list(mapping) == ["/p/b.ts", "/p/c.ts", "/p/a.ts"]


def test_empty_graph_maps_nothing() -> None:
    graph = build_project_graph("/p", [], lambda body, path: [])

    assert realize_paths(graph) == {}
