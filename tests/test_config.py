# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pystaged.config import RunnerOptions, TaskRequest
from pystaged.errors import ConfigError
from pystaged.models import GeneratorSpec, ListSpec, LiteralSpec


def test_task_request_tags_linter_specs(tmp_path: Path) -> None:
    assert TaskRequest(repo_root=tmp_path, linter="eslint").spec == LiteralSpec("eslint")
    assert TaskRequest(repo_root=tmp_path, linter=["a", "b"]).spec == ListSpec(("a", "b"))
    assert isinstance(TaskRequest(repo_root=tmp_path, linter=lambda paths: "x").spec, GeneratorSpec)


def test_task_request_rejects_unknown_spec_types(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        TaskRequest(repo_root=tmp_path, linter=42)


def test_task_request_normalises_root_and_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    request = TaskRequest(repo_root=Path("."), linter="eslint", paths=[Path("a b.js"), "c.js"])
    assert request.repo_root == tmp_path.resolve()
    assert request.paths == ["a b.js", "c.js"]
    assert request.shell is False


def test_runner_options_defaults() -> None:
    options = RunnerOptions.from_env({})
    assert options == RunnerOptions(use_emoji=True, use_color=True, collect_all=False, debug=False)


def test_runner_options_from_env() -> None:
    options = RunnerOptions.from_env(
        {"PYSTAGED_EMOJI": "0", "PYSTAGED_COLLECT_ALL": "yes", "PYSTAGED_DEBUG": "true", "UNRELATED": "x"},
    )
    assert options.use_emoji is False
    assert options.collect_all is True
    assert options.debug is True
    assert options.use_color is True


def test_explicit_overrides_beat_environment() -> None:
    options = RunnerOptions.from_env({"PYSTAGED_COLOR": "off"}, use_color=True)
    assert options.use_color is True


def test_invalid_environment_value() -> None:
    with pytest.raises(ConfigError):
        RunnerOptions.from_env({"PYSTAGED_DEBUG": "sometimes"})
