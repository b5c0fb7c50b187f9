# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command running linter commands against a set of paths."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from ..config import RunnerOptions, TaskRequest
from ..errors import ConfigError, PystagedError, TaskError
from ..executor import run_linters
from ..logging import configure_debug_logging
from ..models import SharedContext
from .shared import CLIError, CLILogger, build_cli_logger


def run_command(
    commands: Annotated[
        list[str],
        typer.Argument(help="Linter command(s); each one runs once against every path."),
    ],
    paths: Annotated[
        list[str] | None,
        typer.Option("--path", "-p", help="Path passed to every command. Repeatable."),
    ] = None,
    repo_root: Annotated[
        Path,
        typer.Option("--repo-root", help="Repository root used as working directory for git commands."),
    ] = Path("."),
    shell: Annotated[bool, typer.Option("--shell", help="Run commands through the system shell.")] = False,
    collect_all: Annotated[
        bool,
        typer.Option("--collect-all", help="Report every failing command instead of the first one."),
    ] = False,
    emoji: Annotated[
        bool | None,
        typer.Option("--emoji/--no-emoji", help="Toggle unicode symbols in output."),
    ] = None,
    color: Annotated[bool | None, typer.Option("--color/--no-color", help="Toggle ANSI colour.")] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Log process invocations to stderr.")] = False,
) -> None:
    """Run COMMANDS concurrently against the given paths."""

    overrides = {"use_emoji": emoji, "use_color": color}
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if collect_all:
        overrides["collect_all"] = True
    if debug:
        overrides["debug"] = True

    try:
        options = RunnerOptions.from_env(**overrides)
    except ConfigError as exc:
        build_cli_logger(emoji=True, color=False).fail(str(exc))
        raise typer.Exit(code=2) from exc

    logger = build_cli_logger(emoji=options.use_emoji, color=options.use_color)
    if options.debug:
        configure_debug_logging()

    try:
        _execute(
            commands,
            paths or [],
            repo_root=repo_root,
            shell=shell,
            options=options,
            logger=logger,
        )
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc


def _execute(
    commands: list[str],
    paths: list[str],
    *,
    repo_root: Path,
    shell: bool,
    options: RunnerOptions,
    logger: CLILogger,
) -> None:
    """Run the linters and print their outcome.

    Raises:
        CLIError: If a linter failed or could not be started.
    """

    linter: str | list[str] = commands[0] if len(commands) == 1 else list(commands)
    try:
        request = TaskRequest(repo_root=repo_root, linter=linter, paths=paths, shell=shell)
    except ValidationError as exc:
        logger.fail(f"Invalid linter configuration: {exc}")
        raise CLIError(str(exc), exit_code=2) from exc

    context = SharedContext()
    try:
        messages = run_linters(request, context, options=options)
    except TaskError as exc:
        logger.report(exc.display_message)
        raise CLIError(exc.display_message) from exc
    except (PystagedError, OSError, ValueError) as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc)) from exc

    for message in messages:
        logger.ok(message)


__all__ = ["run_command"]
