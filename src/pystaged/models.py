# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the pystaged package."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias

CommandGenerator: TypeAlias = Callable[[list[str]], str | Sequence[str]]


@dataclass(frozen=True, slots=True)
class LiteralSpec:
    """A single shell-style command."""

    command: str


@dataclass(frozen=True, slots=True)
class ListSpec:
    """Several commands run against the same paths."""

    commands: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GeneratorSpec:
    """A function deriving commands from the path list.

    Commands produced by ``fn`` already contain the paths they operate on.
    """

    fn: CommandGenerator


LinterSpec: TypeAlias = LiteralSpec | ListSpec | GeneratorSpec


def coerce_spec(raw: object) -> LinterSpec:
    """Return the tagged spec for a raw ``str``, sequence or callable value.

    Args:
        raw: Boundary value describing one linter entry.

    Returns:
        LinterSpec: Tagged representation of ``raw``.

    Raises:
        TypeError: If ``raw`` is neither a string, a sequence of strings nor a callable.
    """

    if isinstance(raw, (LiteralSpec, ListSpec, GeneratorSpec)):
        return raw
    if isinstance(raw, str):
        return LiteralSpec(raw)
    if callable(raw):
        return GeneratorSpec(raw)
    if isinstance(raw, Sequence) and all(isinstance(item, str) for item in raw):
        return ListSpec(tuple(raw))
    raise TypeError(f"Unsupported linter spec {raw!r}: expected a string, a list of strings or a function")


@dataclass(frozen=True, slots=True)
class Resolution:
    """Concrete commands for one run of a linter spec."""

    commands: tuple[str, ...]
    paths_embedded: bool


@dataclass(frozen=True, slots=True)
class TaskDescriptor:
    """Fully resolved, ready-to-run process invocation."""

    name: str
    executable: str
    argv: tuple[str, ...]
    cwd: Path | None = None
    use_shell: bool = False


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of one external process."""

    stdout: str = ""
    stderr: str = ""
    failed: bool = False
    killed: bool = False
    signal: str | None = None
    returncode: int | None = 0


@dataclass(slots=True)
class SharedContext:
    """Per-run state shared by every task of a batch.

    ``has_errors`` only ever goes from ``False`` to ``True``.
    """

    has_errors: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def mark_failed(self) -> None:
        """Record that at least one task of the run failed."""

        with self._lock:
            self.has_errors = True


__all__ = [
    "CommandGenerator",
    "ExecutionResult",
    "GeneratorSpec",
    "LinterSpec",
    "ListSpec",
    "LiteralSpec",
    "Resolution",
    "SharedContext",
    "TaskDescriptor",
    "coerce_spec",
]
