from __future__ import annotations

"""
Import Extraction Service.

Parses TypeScript/JavaScript modules with tree-sitter and reports the
statically declared import specifiers, in source order. Only top-level
import declarations are considered; dynamic import() and require() calls
are not part of the module graph.
"""

import logging
import os
from typing import Dict, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from nestify.domain.errors import ParseFailure

logger = logging.getLogger(__name__)

# Angle-bracket casts (<T>value) only parse with the plain TypeScript grammar
_TYPESCRIPT_EXTENSIONS = (".ts", ".mts", ".cts")

# Lazily created parsers, keyed by grammar name
_PARSERS: Dict[str, Parser] = {}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_imports(source: str, path: str) -> List[str]:
    """
    Return the import specifiers declared by a module.

    Args:
        source: Module source text.
        path: Path of the module; its extension selects the grammar.

    Returns:
        List[str]: Specifiers of every top-level import statement, in order.

    Raises:
        ParseFailure: The source does not parse cleanly.
    """
    parser = _get_parser(grammar_for(path))
    tree = parser.parse(source.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        raise ParseFailure(path, _describe_error(root))

    specifiers: List[str] = []
    for child in root.children:
        if child.type != "import_statement":
            continue
        spec = _string_value(child.child_by_field_name("source"))
        if spec is not None:
            specifiers.append(spec)

    logger.debug(f"{os.path.basename(path)}: {len(specifiers)} imports")
    return specifiers


def grammar_for(path: str) -> str:
    """Select 'typescript' for .ts modules and 'tsx' (TypeScript plus JSX) for everything else."""
    return "typescript" if path.lower().endswith(_TYPESCRIPT_EXTENSIONS) else "tsx"


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _get_parser(grammar: str) -> Parser:
    parser = _PARSERS.get(grammar)
    if parser is None:
        if grammar == "tsx":
            language = Language(tree_sitter_typescript.language_tsx())
        else:
            language = Language(tree_sitter_typescript.language_typescript())
        parser = Parser(language)
        _PARSERS[grammar] = parser
    return parser


def _string_value(node: Optional[Node]) -> Optional[str]:
    """Strip the quotes of a string literal node."""
    if node is None or node.text is None:
        return None
    raw = node.text.decode("utf-8", errors="replace")
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ("'", '"'):
        return raw[1:-1]
    return raw


def _describe_error(root: Node) -> str:
    """Locate the first ERROR or missing node for the failure message."""
    pending = [root]
    while pending:
        node = pending.pop()
        if node.type == "ERROR" or node.is_missing:
            line, column = node.start_point
            return f"syntax error at line {line + 1}, column {column + 1}"
        pending.extend(reversed(node.children))
    return "syntax error"
