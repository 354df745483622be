from __future__ import annotations

"""
Proposed Path Realizer.

Walks the ownership tree from the project root downwards and turns it into
the mapping original path -> proposed path. A file owned by another is placed
in a directory named after its owner's extensionless basename, next to the
owner itself.
"""

import logging
from typing import Dict, List, Optional, Tuple

from nestify.domain.graph_models import ProjectGraph

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def realize_paths(graph: ProjectGraph) -> Dict[str, str]:
    """
    Fill graph.updated_paths from the resolved ownership tree.

    Root-level files (owner None, or never visited) map to
    'root/<basename>'; a file nested k levels deep maps to
    'root/a1/.../ak/<basename>' where each ai is the stem of an owner.

    Args:
        graph: Graph whose ownership has been resolved.

    Returns:
        Dict[str, str]: The ordered rename mapping (also stored on the graph).
    """
    children: Dict[Optional[int], List[int]] = {}
    for node in graph.nodes:
        children.setdefault(node.owner, []).append(node.index)

    mapping: Dict[str, str] = {}
    root_dir = graph.root_path.rstrip("/")

    stack: List[Tuple[int, str]] = [(i, root_dir) for i in reversed(children.get(None, []))]
    while stack:
        index, parent_dir = stack.pop()
        node = graph.nodes[index]
        mapping[node.original_path] = f"{parent_dir}/{node.basename}"

        child_dir = f"{parent_dir}/{node.stem}"
        stack.extend((c, child_dir) for c in reversed(children.get(index, [])))

    graph.updated_paths.clear()
    graph.updated_paths.update(mapping)

    moved = sum(1 for k, v in mapping.items() if k != v)
    logger.debug(f"Realized {len(mapping)} paths ({moved} moved).")
    return mapping
