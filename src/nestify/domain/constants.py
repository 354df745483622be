from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the import-resolution policy (local specifier prefixes and the
ordered suffix search list) together with the default discovery settings.
"""

from typing import List, Tuple

APP_NAME = "Nestify"
APP_VERSION = "0.1.0"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# IMPORT RESOLUTION POLICY
# -----------------------------------------------------------------------------

# Specifiers starting with any of these are resolved against the importer.
LOCAL_PREFIXES: Tuple[str, ...] = ("./", "../", "/")

# Tried in this exact order; the first path present in the graph wins.
RESOLUTION_SUFFIXES: Tuple[str, ...] = (
    "",
    ".d.ts",
    ".ts",
    ".js",
    ".tsx",
    ".jsx",
    "/index.d.ts",
    "/index.ts",
    "/index.js",
    "/index.tsx",
    "/index.jsx",
)

# -----------------------------------------------------------------------------
# DISCOVERY DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_EXTENSIONS: List[str] = [".ts", ".tsx", ".js", ".jsx"]

DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    r"^(\.git|\.hg|\.svn|node_modules|dist|build|coverage)$",
    r"^\.",
]

PARSE_ERROR_POLICIES: Tuple[str, ...] = ("abort", "isolate")

# Lower bound of the automatic relaxation budget.
MIN_VISIT_BUDGET = 10_000
