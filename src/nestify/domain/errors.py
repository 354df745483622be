from __future__ import annotations

"""
Error Taxonomy.

Fatal conditions are exceptions deriving from NestifyError. Unresolved imports
are never raised: they are collected as immutable records on the graph.
"""

from dataclasses import dataclass

# -----------------------------------------------------------------------------
# NON-FATAL RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class UnresolvedImport:
    """
    A local-looking import that did not become a dependency edge.

    Attributes:
        importer: Absolute path of the importing file.
        specifier: Import string as written in the source.
        resolved: Absolute path the specifier resolved to before the suffix search.
        reason: 'not_found' or 'outside_root'.
    """
    importer: str
    specifier: str
    resolved: str
    reason: str


# -----------------------------------------------------------------------------
# FATAL ERRORS
# -----------------------------------------------------------------------------

class NestifyError(Exception):
    """Base class for every fatal error raised while building a layout."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ParseFailure(NestifyError):
    """The import extractor could not process a file body."""


class DuplicatePathError(NestifyError):
    """The same normalized path was supplied twice."""


class StructuralInvariantViolation(NestifyError):
    """Internal inconsistency detected by the ownership resolver."""


class RelaxationBudgetExceeded(StructuralInvariantViolation):
    """The relaxation performed more visits than its budget allows."""
