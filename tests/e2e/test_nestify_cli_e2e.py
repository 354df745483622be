from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr) and configuration persistence.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "nestify" / "main.py"


def run_cli(args: List[str], home: Optional[Path] = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed, and optionally redirects HOME so the saved
    configuration stays inside the test sandbox.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    if home is not None:
        env["HOME"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small TypeScript project.

    Structure:
        app/
          index.ts     -> imports ./widgets/button and ./theme
          theme.ts
          widgets/
            button.tsx -> imports ../theme
    """
    root = tmp_path / "app"
    (root / "widgets").mkdir(parents=True)
    (root / "index.ts").write_text(
        'import { Button } from "./widgets/button";\nimport { theme } from "./theme";\n',
        encoding="utf-8",
    )
    (root / "theme.ts").write_text("export const theme = {};\n", encoding="utf-8")
    (root / "widgets" / "button.tsx").write_text(
        'import { theme } from "../theme";\nexport const Button = () => <button />;\n',
        encoding="utf-8",
    )
    return root


def test_cli_json_mapping(sample_project: Path, tmp_path: Path) -> None:
    proc = run_cli(["--use-defaults", "-r", str(sample_project), "--json"], home=tmp_path)

    assert proc.returncode == 0, proc.stderr
    mapping = json.loads(proc.stdout)
    r = sample_project.as_posix()
    assert mapping == {
        f"{r}/index.ts": f"{r}/index.ts",
        f"{r}/theme.ts": f"{r}/index/theme.ts",
        f"{r}/widgets/button.tsx": f"{r}/index/button.tsx",
    }


def test_cli_tree_and_moved_only(sample_project: Path, tmp_path: Path) -> None:
    proc = run_cli(["--use-defaults", "-r", str(sample_project), "--tree", "--moved-only"], home=tmp_path)

    assert proc.returncode == 0, proc.stderr
    r = sample_project.as_posix()
    assert f"{r}/theme.ts -> {r}/index/theme.ts" in proc.stdout
    assert f"{r}/index.ts -> " not in proc.stdout
    assert "└── index/" in proc.stdout


def test_cli_dump_and_save_config(sample_project: Path, tmp_path: Path) -> None:
    proc = run_cli(
        ["--use-defaults", "-r", str(sample_project), "--on-parse-error", "isolate", "--save-config", "--json"],
        home=tmp_path,
    )
    assert proc.returncode == 0, proc.stderr
    assert (tmp_path / ".nestify" / "config.json").exists()

    dumped = run_cli(["--dump-config"], home=tmp_path)
    assert dumped.returncode == 0, dumped.stderr
    cfg = json.loads(dumped.stdout)
    assert cfg["on_parse_error"] == "isolate"
    assert cfg["root_path"] == str(sample_project)


def test_cli_parse_failure_exit_code(sample_project: Path, tmp_path: Path) -> None:
    (sample_project / "broken.ts").write_text("import {{{ from ;\n", encoding="utf-8")

    proc = run_cli(["--use-defaults", "-r", str(sample_project)], home=tmp_path)

    assert proc.returncode == 1
    assert "broken.ts" in proc.stderr


def test_cli_missing_root(tmp_path: Path) -> None:
    proc = run_cli(["--use-defaults", "-r", str(tmp_path / "nope")], home=tmp_path)

    assert proc.returncode == 2
    assert "Root path does not exist" in proc.stderr


def test_cli_rejects_positional_arguments(tmp_path: Path) -> None:
    proc = run_cli(["unexpected"], home=tmp_path)

    assert proc.returncode == 2
    assert "unrecognized arguments" in proc.stderr
