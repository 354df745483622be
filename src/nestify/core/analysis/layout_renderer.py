from __future__ import annotations

"""
Proposed Layout Renderer.

Converts a rename mapping into an ASCII tree of the proposed directory
structure, relative to the project root.
"""

from typing import Dict, List, Mapping, Union

LayoutTree = Dict[str, Union["LayoutTree", None]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_layout_tree(mapping: Mapping[str, str], root_path: str) -> LayoutTree:
    """
    Nest the proposed paths into a dictionary tree.

    Files are leaves (None); directories are dictionaries. A directory and a
    file of the same stem coexist since the file keeps its extension.
    """
    root = root_path.rstrip("/")
    tree: LayoutTree = {}

    for proposed in mapping.values():
        rel = proposed[len(root):] if proposed.startswith(root + "/") else proposed
        parts = [p for p in rel.split("/") if p]
        level = tree
        for part in parts[:-1]:
            nxt = level.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                level[part] = nxt
            level = nxt
        if parts:
            level.setdefault(parts[-1], None)

    return tree


def render_layout(tree: LayoutTree, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the visual lines of a layout tree.

    Uses standard ASCII connectors (├──, └──); directories get a trailing '/'.

    Args:
        tree: Current level to render.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries = sorted(tree.keys(), key=lambda k: (k.split(".", 1)[0], isinstance(tree[k], dict), k))
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        node = tree[entry]

        if isinstance(node, dict):
            lines.append(f"{prefix}{connector}{entry}/")
            render_layout(node, lines, prefix + ("    " if is_last else "│   "))
            continue

        lines.append(f"{prefix}{connector}{entry}")


def render_mapping_tree(mapping: Mapping[str, str], root_path: str) -> List[str]:
    """Render a rename mapping as tree lines headed by the root path."""
    lines: List[str] = [root_path.rstrip("/") or "/"]
    render_layout(build_layout_tree(mapping, root_path), lines)
    return lines
