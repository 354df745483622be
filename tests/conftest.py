from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A table-driven fake import extractor so graph tests do not need a parser.
3. The reference multi-consumer project used across graph tests.
"""

import os
import sys
from typing import Callable, Dict, List, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from nestify.domain.graph_models import ImportExtractor, SourceFile  # noqa: E402

ProjectFactory = Callable[[Dict[str, List[str]]], Tuple[List[SourceFile], ImportExtractor]]


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_project() -> ProjectFactory:
    """
    Return a factory turning {path: [specifiers]} into files plus an extractor.

    The extractor answers from the table, keyed by path, so tests control the
    exact import list of every file.
    """
    def factory(imports: Dict[str, List[str]]) -> Tuple[List[SourceFile], ImportExtractor]:
        files = [
            SourceFile(path, "".join(f'import "{s}";\n' for s in specs))
            for path, specs in imports.items()
        ]

        def extract(body: str, path: str) -> List[str]:
            return list(imports.get(path, []))

        return files, extract

    return factory


@pytest.fixture
def simple_project_imports() -> Dict[str, List[str]]:
    """
    A small application with two entry points (main.ts and tool.ts).

    math-utils is shared by unrelated consumers; string-utils is shared by
    two modules that both live under main.
    """
    return {
        "/src/main.ts": ["./cli.ts", "./business.ts"],
        "/src/cli.ts": ["./string-utils.ts"],
        "/src/tool.ts": ["./math-utils.ts"],
        "/src/math-utils.ts": [],
        "/src/string-utils.ts": [],
        "/src/business.ts": ["./user.ts", "./property.ts"],
        "/src/user.ts": ["./string-utils.ts"],
        "/src/property.ts": ["./math-utils.ts"],
    }


@pytest.fixture
def simple_project_layout() -> Dict[str, str]:
    """Expected proposed paths for simple_project_imports rooted at /src."""
    return {
        "/src/main.ts": "/src/main.ts",
        "/src/tool.ts": "/src/tool.ts",
        "/src/math-utils.ts": "/src/math-utils.ts",
        "/src/cli.ts": "/src/main/cli.ts",
        "/src/business.ts": "/src/main/business.ts",
        "/src/string-utils.ts": "/src/main/string-utils.ts",
        "/src/user.ts": "/src/main/business/user.ts",
        "/src/property.ts": "/src/main/business/property.ts",
    }


@pytest.fixture
def converging_chain_imports() -> Callable[[int], Dict[str, List[str]]]:
    """
    Return a factory for a deep chain a0 -> ... -> a(n-1) with one extra
    entry e_k importing each a_k.

    Entries come first, e0 before e1, so every new entry lifts the rest of
    the chain one step closer to the root and forces repeated relaxation.
    Only a0 has a single consumer; every other a_k ends up at the root.
    """
    def factory(length: int) -> Dict[str, List[str]]:
        imports: Dict[str, List[str]] = {
            f"/src/e{k}.ts": [f"./a{k}"] for k in range(length)
        }
        for k in range(length):
            imports[f"/src/a{k}.ts"] = [f"./a{k + 1}"] if k + 1 < length else []
        return imports

    return factory
