# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors)."""

from __future__ import annotations

from dataclasses import dataclass

from ..logging import echo as core_echo
from ..logging import fail as core_fail
from ..logging import ok as core_ok


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji and colour settings."""

    use_emoji: bool
    use_color: bool

    def fail(self, message: str) -> None:
        """Log a failure message."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        """Log a success message."""

        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def report(self, message: str) -> None:
        """Print a preformatted task report verbatim, set apart by blank lines."""

        core_echo(f"\n\n{message}", use_color=self.use_color)


def build_cli_logger(*, emoji: bool, color: bool) -> CLILogger:
    """Return a :class:`CLILogger` configured for the provided preferences."""

    return CLILogger(use_emoji=emoji, use_color=color)


__all__ = ["CLIError", "CLILogger", "build_cli_logger"]
