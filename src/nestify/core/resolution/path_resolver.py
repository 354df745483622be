from __future__ import annotations

"""
Import Path Resolution.

Turns an import specifier written in a file into the absolute path of
another file of the project, following the extension and index-file search
order used by TypeScript/JavaScript tooling.
"""

import posixpath
from typing import Iterator, Mapping, Optional

from nestify.domain.constants import LOCAL_PREFIXES, RESOLUTION_SUFFIXES

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def normalize(path: str) -> str:
    """
    Normalize a path to the absolute POSIX form used as node key.

    Backslashes are converted so Windows paths share the same key space.
    """
    p = path.replace("\\", "/")
    if not p.startswith("/") and ":" not in p.split("/", 1)[0]:
        p = "/" + p
    p = posixpath.normpath(p)
    # normpath keeps a leading '//' as-is (POSIX allows it to be special)
    if p.startswith("//"):
        p = "/" + p.lstrip("/")
    return p


def is_local_specifier(specifier: str) -> bool:
    """Return True for './x', '../x' and '/x'; package imports are never local."""
    return specifier.startswith(LOCAL_PREFIXES)


def resolve_specifier(specifier: str, importer_dir: str) -> str:
    """
    Join a local specifier against the importing file's directory.

    Args:
        specifier: Local import string.
        importer_dir: Directory containing the importing file.

    Returns:
        str: Normalized absolute candidate path (no suffix search applied).
    """
    return normalize(posixpath.join(importer_dir, specifier))


def candidate_paths(resolved: str) -> Iterator[str]:
    """Yield the resolution search list for a candidate, in priority order."""
    for suffix in RESOLUTION_SUFFIXES:
        yield resolved + suffix


def is_within_root(path: str, root_path: str) -> bool:
    """Check whether a normalized path lies inside the (normalized) root."""
    root = root_path.rstrip("/")
    return path == root or path.startswith(root + "/")


def find_dependency(resolved: str, known: Mapping[str, int]) -> Optional[int]:
    """
    Run the suffix search against the known node table.

    Args:
        resolved: Candidate path from resolve_specifier.
        known: Table of normalized path -> node index.

    Returns:
        Optional[int]: Index of the first matching node, or None.
    """
    for path in candidate_paths(resolved):
        index = known.get(path)
        if index is not None:
            return index
    return None
