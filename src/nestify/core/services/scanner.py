from __future__ import annotations

"""
Source Discovery Service.

Walks a project directory, prunes excluded entries and loads the bodies of
the module files that feed the graph builder.
"""

import logging
import os
import re
from typing import Iterable, Iterator, List, Optional, Tuple

from nestify.core.services.filters import (
    compile_patterns,
    default_exclude_patterns,
    default_extensions,
    has_extension,
    load_gitignore_patterns,
    matches_any,
)
from nestify.domain.graph_models import SourceFile

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def prepare_exclusions(
        root_path: str,
        exclude_patterns: Optional[List[str]],
        respect_gitignore: bool,
) -> List[re.Pattern]:
    """
    Compile user or default exclusions, extended with local .gitignore rules.

    Args:
        root_path: Path to the project root.
        exclude_patterns: Raw exclusion regexes, None for the defaults.
        respect_gitignore: Whether to parse the root .gitignore file.

    Returns:
        List[re.Pattern]: Compiled exclusion patterns.
    """
    final_exclusions = list(exclude_patterns) if exclude_patterns is not None else default_exclude_patterns()

    if respect_gitignore:
        git_patterns = load_gitignore_patterns(os.path.abspath(root_path))
        if git_patterns:
            logger.debug(f"Loaded {len(git_patterns)} patterns from .gitignore")
            final_exclusions.extend(git_patterns)

    return compile_patterns(final_exclusions)


def yield_source_files(
        root_path: str,
        extensions: Optional[List[str]],
        exclude_rx: List[re.Pattern],
) -> Iterator[str]:
    """
    Traverse the filesystem and yield module files in deterministic order.

    Excluded directories are pruned in place so their content is never
    visited.

    Args:
        root_path: Project root directory.
        extensions: Whitelist of module extensions.
        exclude_rx: Compiled exclusion patterns, matched on entry names.

    Yields:
        str: Absolute POSIX-style path of each module file.
    """
    exts = extensions or default_extensions()
    root_abs = os.path.abspath(root_path)

    for root, dirs, files in os.walk(root_abs):
        dirs[:] = [d for d in dirs if not matches_any(d, exclude_rx)]
        dirs.sort()
        files.sort()

        for file_name in files:
            if matches_any(file_name, exclude_rx):
                continue
            if not has_extension(file_name, exts):
                continue
            yield to_posix(os.path.join(root, file_name))


def read_source_files(paths: Iterable[str]) -> Tuple[List[SourceFile], List[str]]:
    """
    Load file bodies as UTF-8, replacing undecodable bytes.

    Args:
        paths: Files to read.

    Returns:
        Tuple[List[SourceFile], List[str]]: (Loaded files, paths that failed to read).
    """
    loaded: List[SourceFile] = []
    failed: List[str] = []

    for path in paths:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                loaded.append(SourceFile(path=path, body=f.read()))
        except OSError as e:
            logger.warning(f"Skipping unreadable file {path}: {e}")
            failed.append(path)

    return loaded, failed


def to_posix(path: str) -> str:
    """Use forward slashes regardless of platform."""
    return path.replace(os.sep, "/") if os.sep != "/" else path
