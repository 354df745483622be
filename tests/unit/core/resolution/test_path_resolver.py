from __future__ import annotations

"""
Unit tests for Import Path Resolution.

Verifies local specifier detection, joining against the importer directory,
the fixed suffix search order and the project root guard.
"""

import pytest

from nestify.core.resolution.path_resolver import (
    candidate_paths,
    find_dependency,
    is_local_specifier,
    is_within_root,
    normalize,
    resolve_specifier,
)


@pytest.mark.parametrize("specifier, expected", [
    ("./cli", True),
    ("../shared/math", True),
    ("/abs/path", True),
    ("react", False),
    ("@scope/pkg", False),
    ("lodash/fp", False),
    (".hidden", False),
    ("b.ts", False),
])
def test_is_local_specifier(specifier: str, expected: bool) -> None:
    assert is_local_specifier(specifier) is expected


def test_resolve_specifier_relative_and_parent() -> None:
    assert resolve_specifier("./cli", "/src") == "/src/cli"
    assert resolve_specifier("../lib/x.ts", "/src/app") == "/src/lib/x.ts"
    assert resolve_specifier("./a/../b/./c", "/src") == "/src/b/c"


def test_resolve_specifier_absolute_ignores_importer_dir() -> None:
    assert resolve_specifier("/other/file.ts", "/src/app") == "/other/file.ts"


def test_normalize_handles_backslashes_and_double_slashes() -> None:
    assert normalize("/src//app/./x.ts") == "/src/app/x.ts"
    assert normalize("//src/x.ts") == "/src/x.ts"
    assert normalize("\\src\\x.ts") == "/src/x.ts"
    assert normalize("/src/dir/") == "/src/dir"


def test_candidate_paths_fixed_priority_order() -> None:
    assert list(candidate_paths("/src/a")) == [
        "/src/a",
        "/src/a.d.ts",
        "/src/a.ts",
        "/src/a.js",
        "/src/a.tsx",
        "/src/a.jsx",
        "/src/a/index.d.ts",
        "/src/a/index.ts",
        "/src/a/index.js",
        "/src/a/index.tsx",
        "/src/a/index.jsx",
    ]


def test_find_dependency_prefers_exact_then_declaration_files() -> None:
    known = {"/src/a.ts": 0, "/src/a.d.ts": 1, "/src/a/index.ts": 2, "/src/a": 3}
    assert find_dependency("/src/a", known) == 3

    del known["/src/a"]
    assert find_dependency("/src/a", known) == 1

    del known["/src/a.d.ts"]
    assert find_dependency("/src/a", known) == 0


def test_find_dependency_index_file_and_missing() -> None:
    known = {"/src/widgets/index.tsx": 4}
    assert find_dependency("/src/widgets", known) == 4
    assert find_dependency("/src/nothing", known) is None


@pytest.mark.parametrize("path, root, expected", [
    ("/src/a.ts", "/src", True),
    ("/src/a.ts", "/src/", True),
    ("/src/deep/a.ts", "/src", True),
    ("/src2/a.ts", "/src", False),
    ("/lib/a.ts", "/src", False),
    ("/anything.ts", "/", True),
])
def test_is_within_root(path: str, root: str, expected: bool) -> None:
    assert is_within_root(path, root) is expected
