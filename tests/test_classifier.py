# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for result classification."""

from __future__ import annotations

import pytest

from pystaged.classifier import classify, success_message
from pystaged.errors import LintFailureError, TaskError, TerminatedError
from pystaged.logging import ASCII_SYMBOLS, EMOJI_SYMBOLS
from pystaged.models import ExecutionResult, SharedContext


def test_success_leaves_context_untouched() -> None:
    context = SharedContext()
    message = classify("eslint", ExecutionResult(stdout="fine"), context, use_color=False)
    assert message == f"{EMOJI_SYMBOLS.success} eslint passed!"
    assert context.has_errors is False


@pytest.mark.parametrize("name", ["", "eslint --fix", "a*b?[c] $(x) `y` 'z'", "名前"])
def test_success_message_is_not_escaped(name: str) -> None:
    assert success_message(name) == f"{EMOJI_SYMBOLS.success} {name} passed!"
    assert success_message(name, ASCII_SYMBOLS) == f"√ {name} passed!"


def test_lint_failure_carries_output_on_display_message() -> None:
    context = SharedContext()
    result = ExecutionResult(stdout="err1", stderr="", failed=True, returncode=1)

    with pytest.raises(LintFailureError) as excinfo:
        classify("eslint", result, context, use_color=False)

    error = excinfo.value
    assert "found some errors" in error.display_message
    assert "err1" in error.display_message
    assert error.display_message.splitlines() == [
        f"{EMOJI_SYMBOLS.error} eslint found some errors. Please fix them and try committing again.",
        "err1",
    ]
    assert str(error) == ""
    assert error.name == "eslint"
    assert context.has_errors is True


def test_lint_failure_keeps_output_verbatim() -> None:
    stdout = "line 1\n  line 2\t\x1b[31mred\x1b[0m"
    stderr = "warning: ünïcödé"
    with pytest.raises(LintFailureError) as excinfo:
        classify(
            "tsc",
            ExecutionResult(stdout=stdout, stderr=stderr, failed=True),
            SharedContext(),
            use_color=False,
        )
    assert excinfo.value.display_message.endswith(f"\n{stdout}\n{stderr}")


def test_termination_wins_over_failure() -> None:
    context = SharedContext()
    result = ExecutionResult(failed=True, killed=True, signal="SIGTERM")

    with pytest.raises(TerminatedError) as excinfo:
        classify("eslint", result, context, use_color=False)

    assert "was terminated with SIGTERM" in excinfo.value.display_message
    assert excinfo.value.display_message.startswith(EMOJI_SYMBOLS.warning)
    assert excinfo.value.signal == "SIGTERM"
    assert context.has_errors is True


def test_signal_without_killed_flag_is_termination() -> None:
    with pytest.raises(TerminatedError):
        classify("eslint", ExecutionResult(signal="SIGKILL"), SharedContext(), use_color=False)


def test_empty_signal_is_not_termination() -> None:
    assert classify("eslint", ExecutionResult(signal=""), SharedContext(), use_color=False).endswith("passed!")


def test_has_errors_is_never_reset() -> None:
    context = SharedContext()
    with pytest.raises(TaskError):
        classify("a", ExecutionResult(failed=True), context, use_color=False)
    classify("b", ExecutionResult(), context, use_color=False)
    assert context.has_errors is True
