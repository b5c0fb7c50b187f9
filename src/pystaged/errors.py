# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the task engine.

Task failures keep their human readable text on :attr:`TaskError.display_message`
and leave the generic exception message empty. Anything that aggregates errors
from several tasks must render ``display_message`` only; printing ``str(exc)``
as well would show every report twice.
"""

from __future__ import annotations

from collections.abc import Sequence


class PystagedError(Exception):
    """Base class for errors raised by :mod:`pystaged`."""


class TaskError(PystagedError):
    """A linter task finished unsuccessfully."""

    def __init__(self, display_message: str, *, name: str = "") -> None:
        super().__init__()
        self.display_message = display_message
        self.name = name


class TerminatedError(TaskError):
    """The linter process was killed or ended by a signal."""

    def __init__(self, display_message: str, *, name: str = "", signal: str | None = None) -> None:
        super().__init__(display_message, name=name)
        self.signal = signal


class LintFailureError(TaskError):
    """The linter process exited with a failing status."""


class BatchFailure(TaskError):
    """Every task failure of a batch, collected in declaration order."""

    def __init__(self, errors: Sequence[TaskError]) -> None:
        super().__init__("\n".join(error.display_message for error in errors))
        self.errors = tuple(errors)


class EmptyCommandError(PystagedError, ValueError):
    """A command string contained no executable."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Command {command!r} does not name an executable")
        self.command = command


class ProcessExecutionError(PystagedError):
    """Raised when a process fails while ``reject`` is enabled."""

    def __init__(self, command: Sequence[str], returncode: int | None, stdout: str, stderr: str) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class ConfigError(PystagedError):
    """Raised when configuration input is invalid."""


__all__ = [
    "BatchFailure",
    "ConfigError",
    "EmptyCommandError",
    "LintFailureError",
    "ProcessExecutionError",
    "PystagedError",
    "TaskError",
    "TerminatedError",
]
