from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object exchanged between the reorganization pipeline and
the interface layer, plus its factory functions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from nestify.domain.errors import UnresolvedImport

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ReorganizeResult:
    """
    Unified result of a complete layout computation.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        root_path: Normalized project root that was analyzed.
        mapping: Ordered original path -> proposed path mapping.
        unresolved: Local imports that did not become edges.
        isolated: Files kept without dependencies after a parse failure.
        unreadable: Files that could not be read from disk.
        tree_lines: ASCII preview of the proposed layout, when requested.
        summary: Execution statistics.
    """
    ok: bool
    error: str
    root_path: str

    mapping: Dict[str, str] = field(default_factory=dict)
    unresolved: List[UnresolvedImport] = field(default_factory=list)
    isolated: List[str] = field(default_factory=list)
    unreadable: List[str] = field(default_factory=list)
    tree_lines: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def moved(self) -> Dict[str, str]:
        return {k: v for k, v in self.mapping.items() if k != v}

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        root_path: str,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ReorganizeResult:
    """
    Create a failed result instance.

    Args:
        error: Detailed error description.
        root_path: The analyzed root directory.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        ReorganizeResult: An immutable error result object.
    """
    return ReorganizeResult(
        ok=False,
        error=error,
        root_path=root_path,
        summary=summary_extra or {},
    )


def create_success_result(
        root_path: str,
        mapping: Dict[str, str],
        unresolved: List[UnresolvedImport],
        isolated: List[str],
        unreadable: List[str],
        tree_lines: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ReorganizeResult:
    """
    Create a successful result instance.

    Returns:
        ReorganizeResult: An immutable success result object.
    """
    return ReorganizeResult(
        ok=True,
        error="",
        root_path=root_path,
        mapping=dict(mapping),
        unresolved=list(unresolved),
        isolated=list(isolated),
        unreadable=list(unreadable),
        tree_lines=tree_lines or [],
        summary=summary_extra or {},
    )
