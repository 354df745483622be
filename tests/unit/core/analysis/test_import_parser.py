from __future__ import annotations

"""
Unit tests for the tree-sitter Import Extraction Service.

Verifies which statements count as static imports, source ordering,
grammar selection and syntax error reporting.
"""

import pytest

from nestify.core.analysis.import_parser import extract_imports, grammar_for
from nestify.domain.errors import ParseFailure


def test_collects_all_static_import_forms_in_order() -> None:
    source = """
import "./side-effect";
import def from './default';
import { a, b as c } from "../named";
import * as ns from "./namespace";
import type { Shape } from "./types";
import React from "react";

export const value = 1;
"""
    assert extract_imports(source, "/src/app.ts") == [
        "./side-effect",
        "./default",
        "../named",
        "./namespace",
        "./types",
        "react",
    ]


def test_dynamic_imports_requires_and_reexports_are_ignored() -> None:
    source = """
export { helper } from "./reexported";
const legacy = require("./required");

export function load() {
    return import("./lazy");
}
"""
    assert extract_imports(source, "/src/loader.ts") == []


def test_module_without_imports() -> None:
    assert extract_imports("export const EMPTY = '';\n", "/src/string-utils.ts") == []


def test_tsx_files_accept_jsx_syntax() -> None:
    source = """
import React from "react";
import { Button } from "./button";

export const App = () => <div><Button label="ok" /></div>;
"""
    assert extract_imports(source, "/src/App.tsx") == ["react", "./button"]


def test_js_files_accept_jsx_syntax() -> None:
    source = (
        'import React from "react";\n'
        'import Button from "./Button";\n'
        "export const App = () => <Button />;\n"
    )
    assert extract_imports(source, "/src/App.js") == ["react", "./Button"]


def test_ts_files_keep_angle_bracket_casts() -> None:
    source = 'import { load } from "./loader";\nconst value = <number>load();\n'
    assert extract_imports(source, "/src/cast.ts") == ["./loader"]


@pytest.mark.parametrize("path, grammar", [
    ("/src/a.ts", "typescript"),
    ("/src/a.d.ts", "typescript"),
    ("/src/a.mts", "typescript"),
    ("/src/a.js", "tsx"),
    ("/src/a.tsx", "tsx"),
    ("/src/A.JSX", "tsx"),
])
def test_grammar_selection(path: str, grammar: str) -> None:
    assert grammar_for(path) == grammar


def test_syntax_error_raises_parse_failure() -> None:
    with pytest.raises(ParseFailure) as exc:
        extract_imports("import {{{ from ;\nconst = ;\n", "/src/broken.ts")

    assert exc.value.path == "/src/broken.ts"
    assert "syntax error" in exc.value.reason
