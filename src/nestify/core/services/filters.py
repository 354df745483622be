from __future__ import annotations

"""
File Filtering Engine.

Implements regex-based exclusion and extension matching for source
discovery. Supports integration with .gitignore glob patterns.
"""

import fnmatch
import logging
import os
import re
from typing import List

from nestify.domain.constants import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_extensions() -> List[str]:
    """
    Get the default list of module file extensions.

    Returns:
        List[str]: TypeScript and JavaScript source extensions.
    """
    return list(DEFAULT_EXTENSIONS)


def default_exclude_patterns() -> List[str]:
    """
    Get the system-level exclusion patterns.

    Skips VCS metadata, dependency folders, build output and dot entries.

    Returns:
        List[str]: List of regex patterns for common exclusions.
    """
    return list(DEFAULT_EXCLUDE_PATTERNS)

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed regex strings are discarded with a warning.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Ignoring invalid pattern '{p}': {e}")
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """Verify if a name matches at least one compiled regex pattern."""
    return any(rx.search(name) for rx in compiled_patterns)


def has_extension(file_name: str, extensions: List[str]) -> bool:
    """
    Check a filename against the extension whitelist.

    Uses suffix matching so compound extensions ('.d.ts') are covered by
    their last component ('.ts').
    """
    lower = file_name.lower()
    return any(lower.endswith(ext.lower()) for ext in extensions)

# -----------------------------------------------------------------------------
# GITIGNORE INTEGRATION
# -----------------------------------------------------------------------------

def load_gitignore_patterns(root_path: str) -> List[str]:
    """
    Parse a .gitignore file and translate its glob rules into Python regexes.

    Negations ('!pattern') are not supported and are skipped.

    Args:
        root_path: Directory containing the .gitignore file.

    Returns:
        List[str]: List of equivalent regex strings.
    """
    gitignore_path = os.path.join(root_path, ".gitignore")
    if not os.path.exists(gitignore_path):
        return []

    regex_patterns: List[str] = []
    try:
        with open(gitignore_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or line.startswith("!"):
                    continue
                regex_patterns.append(_gitignore_to_regex(line))
    except OSError as e:
        logger.warning(f"Could not read {gitignore_path}: {e}")

    return regex_patterns


def _gitignore_to_regex(glob_pattern: str) -> str:
    """Translate a gitignore glob, matched against single path entries."""
    return fnmatch.translate(glob_pattern.strip("/"))
