# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn linter specs into concrete command invocations."""

from __future__ import annotations

import re
import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from .errors import EmptyCommandError
from .models import GeneratorSpec, LinterSpec, ListSpec, LiteralSpec, Resolution, coerce_spec
from .process import ExecutionOptions

GIT_COMMAND_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*git(\.exe)?(\s|$)", re.IGNORECASE)


def _as_commands(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise TypeError(f"Linter function returned {value!r}; expected a string or a list of strings")


def resolve_spec(spec: LinterSpec | object, paths: Sequence[str]) -> Resolution:
    """Return the commands a linter spec expands to for ``paths``.

    Functions are called with the path list and their result is treated like a
    literal or list spec. Paths count as embedded for the whole resolution when
    the spec is a function. Errors raised by the function propagate unchanged.

    Args:
        spec: Tagged spec, or a raw string, list or callable.
        paths: Paths the linter runs against.

    Returns:
        Resolution: Ordered commands and the ``paths_embedded`` flag.
    """

    tagged = coerce_spec(spec)
    if isinstance(tagged, GeneratorSpec):
        return Resolution(commands=_as_commands(tagged.fn(list(paths))), paths_embedded=True)
    if isinstance(tagged, LiteralSpec):
        return Resolution(commands=(tagged.command,), paths_embedded=False)
    if isinstance(tagged, ListSpec):
        return Resolution(commands=tagged.commands, paths_embedded=False)
    raise TypeError(f"Unsupported linter spec {tagged!r}")


def parse_command(command: str) -> tuple[str, list[str]]:
    """Split ``command`` into its executable and arguments with POSIX shell rules.

    Raises:
        EmptyCommandError: If the command contains no tokens.
        ValueError: If quotes are unbalanced.
    """

    tokens = shlex.split(command, posix=True)
    if not tokens:
        raise EmptyCommandError(command)
    executable, *argv = tokens
    return executable, argv


def inject_paths(
    argv: Sequence[str],
    paths: Sequence[str],
    *,
    paths_embedded: bool,
    quote: bool = False,
) -> list[str]:
    """Append ``paths`` to ``argv`` unless the command already embeds them.

    ``quote`` shell-escapes each path so a shell sees it as one word.
    """

    if paths_embedded:
        return list(argv)
    if quote:
        return [*argv, *(shlex.quote(path) for path in paths)]
    return [*argv, *paths]


def is_git_command(command: str) -> bool:
    """Return ``True`` when the raw ``command`` invokes the git binary."""

    return GIT_COMMAND_PATTERN.match(command) is not None


def select_environment(
    command: str,
    *,
    repo_root: Path,
    cwd: Path | None = None,
    shell: bool = False,
) -> ExecutionOptions:
    """Choose execution options for the raw ``command``.

    Git commands run from the repository root when it differs from the working
    directory; every other tool runs in the working directory.

    Args:
        command: Unparsed command string.
        repo_root: Repository root directory.
        cwd: Working directory of the current process; defaults to :meth:`Path.cwd`.
        shell: Caller's shell flag, passed through unchanged.

    Returns:
        ExecutionOptions: Options preferring local binaries and never rejecting.
    """

    process_cwd = (cwd or Path.cwd()).resolve()
    root = repo_root.resolve()
    execution_cwd = root if is_git_command(command) and root != process_cwd else None
    return ExecutionOptions(cwd=execution_cwd, shell=shell, prefer_local=True, reject=False)


__all__ = [
    "inject_paths",
    "is_git_command",
    "parse_command",
    "resolve_spec",
    "select_environment",
]
