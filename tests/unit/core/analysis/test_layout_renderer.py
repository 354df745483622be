from __future__ import annotations

"""
Unit tests for the Proposed Layout Renderer.
"""

from nestify.core.analysis.layout_renderer import build_layout_tree, render_mapping_tree


def test_build_layout_tree_nests_relative_to_root(simple_project_layout) -> None:
    tree = build_layout_tree(simple_project_layout, "/src")

    assert tree["main.ts"] is None
    assert tree["main"]["business"]["user.ts"] is None
    assert set(tree) == {"main.ts", "main", "tool.ts", "math-utils.ts"}


def test_render_mapping_tree_places_files_before_their_directory(simple_project_layout) -> None:
    lines = render_mapping_tree(simple_project_layout, "/src/")

    assert lines == [
        "/src",
        "├── main.ts",
        "├── main/",
        "│   ├── business.ts",
        "│   ├── business/",
        "│   │   ├── property.ts",
        "│   │   └── user.ts",
        "│   ├── cli.ts",
        "│   └── string-utils.ts",
        "├── math-utils.ts",
        "└── tool.ts",
    ]


def test_render_empty_mapping() -> None:
    assert render_mapping_tree({}, "/") == ["/"]
