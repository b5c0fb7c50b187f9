# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map process results onto success messages or task errors."""

from __future__ import annotations

from .errors import LintFailureError, TerminatedError
from .logging import EMOJI_SYMBOLS, Symbols, colorize
from .models import ExecutionResult, SharedContext

FAILURE_HINT = "found some errors. Please fix them and try committing again."


def success_message(name: str, symbols: Symbols = EMOJI_SYMBOLS) -> str:
    """Return the message reported when ``name`` passed.

    ``name`` is inserted as-is.
    """

    return f"{symbols.success} {name} passed!"


def classify(
    name: str,
    result: ExecutionResult,
    context: SharedContext,
    *,
    symbols: Symbols = EMOJI_SYMBOLS,
    use_color: bool = True,
) -> str:
    """Return the success message for ``result`` or raise the matching task error.

    Terminations are checked before exit status. Every failure marks
    ``context`` as failed before the error is raised.

    Args:
        name: Display name of the linter, the unparsed command.
        result: Result of the linter process.
        context: Shared run state updated on failure.
        symbols: Glyphs used as message prefixes.
        use_color: Flag indicating whether ANSI colour may be applied.

    Returns:
        str: Success message.

    Raises:
        TerminatedError: If the process was killed or ended by a signal.
        LintFailureError: If the process failed.
    """

    if result.killed or result.signal:
        context.mark_failed()
        headline = colorize(f"{name} was terminated with {result.signal}", "yellow", use_color)
        raise TerminatedError(f"{symbols.warning} {headline}", name=name, signal=result.signal)
    if result.failed:
        context.mark_failed()
        headline = colorize(f"{name} {FAILURE_HINT}", "bright_red", use_color)
        raise LintFailureError(
            "\n".join([f"{symbols.error} {headline}", result.stdout, result.stderr]),
            name=name,
        )
    return success_message(name, symbols)


__all__ = ["FAILURE_HINT", "classify", "success_message"]
