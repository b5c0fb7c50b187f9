# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for task runs."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .models import LinterSpec, coerce_spec

ENV_PREFIX: Final[str] = "PYSTAGED_"
_ENV_FIELDS: Final[dict[str, str]] = {
    "EMOJI": "use_emoji",
    "COLOR": "use_color",
    "COLLECT_ALL": "collect_all",
    "DEBUG": "debug",
}


class TaskRequest(BaseModel):
    """Input supplied by the surrounding task runner for one linter entry."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    repo_root: Path
    linter: Any
    paths: list[str] = Field(default_factory=list)
    shell: bool = False

    @field_validator("repo_root", mode="after")
    @classmethod
    def _resolve_root(cls, value: Path) -> Path:
        """Return ``value`` as an absolute path."""
        return value.expanduser().resolve()

    @field_validator("linter", mode="before")
    @classmethod
    def _coerce_linter(cls, value: object) -> LinterSpec:
        """Convert raw strings, lists and callables to tagged specs."""
        try:
            return coerce_spec(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("paths", mode="before")
    @classmethod
    def _coerce_paths(cls, value: object) -> object:
        """Accept :class:`os.PathLike` entries alongside strings."""
        if isinstance(value, (list, tuple)):
            return [os.fspath(item) if isinstance(item, os.PathLike) else item for item in value]
        return value

    @property
    def spec(self) -> LinterSpec:
        """Return the tagged linter spec."""

        return self.linter


class RunnerOptions(BaseModel):
    """Presentation and aggregation preferences for a run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    use_emoji: bool = True
    use_color: bool = True
    collect_all: bool = False
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: bool) -> RunnerOptions:
        """Build options from ``PYSTAGED_*`` environment variables.

        Args:
            environ: Environment mapping; defaults to :data:`os.environ`.
            **overrides: Explicit values taking precedence over the environment.

        Returns:
            RunnerOptions: Validated options.

        Raises:
            ConfigError: If a variable holds a value that is not a boolean.
        """

        source = os.environ if environ is None else environ
        values: dict[str, object] = {
            field_name: source[f"{ENV_PREFIX}{suffix}"]
            for suffix, field_name in _ENV_FIELDS.items()
            if f"{ENV_PREFIX}{suffix}" in source
        }
        values.update(overrides)
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


__all__ = ["RunnerOptions", "TaskRequest"]
