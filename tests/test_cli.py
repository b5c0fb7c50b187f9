# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the command line interface."""

from __future__ import annotations

import shlex
import sys
from pathlib import Path

from typer.testing import CliRunner

from pystaged.cli.app import app

PYTHON = shlex.quote(sys.executable)


def test_run_reports_success(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["run", f"{PYTHON} -c pass", "--path", "a.py", "--repo-root", str(tmp_path), "--no-color"],
    )
    assert result.exit_code == 0
    assert "passed!" in result.stdout


def test_run_renders_failure_once(tmp_path: Path) -> None:
    failing = f"{PYTHON} -c \"print('unique' + '-lint-output'); raise SystemExit(1)\""
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["run", failing, "-p", "a.py", "--repo-root", str(tmp_path), "--no-color", "--no-emoji"],
    )
    assert result.exit_code == 1
    assert result.stdout.count("unique-lint-output") == 1
    assert result.stdout.count("found some errors") == 1
    assert "× " in result.stdout
    assert result.stdout.startswith("\n\n× ")


def test_run_collect_all(tmp_path: Path) -> None:
    failing = f"{PYTHON} -c \"raise SystemExit(1)\""
    other = f"{PYTHON} -c \"raise SystemExit(2)\""
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["run", failing, other, "--repo-root", str(tmp_path), "--no-color", "--collect-all"],
    )
    assert result.exit_code == 1
    assert result.stdout.count("found some errors") == 2


def test_run_missing_executable(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["run", "pystaged-definitely-missing-binary", "--repo-root", str(tmp_path), "--no-color"],
    )
    assert result.exit_code == 1
    assert "was not found" in result.stdout


def test_run_invalid_environment(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["run", "eslint", "--repo-root", str(tmp_path)],
        env={"PYSTAGED_COLLECT_ALL": "perhaps"},
    )
    assert result.exit_code == 2


def test_version() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("pystaged ")
