# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from .run import run_command

app = typer.Typer(
    name="pystaged",
    help="Run linter commands concurrently against staged files.",
    no_args_is_help=True,
    add_completion=False,
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"pystaged {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_show_version, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Run linter commands concurrently against staged files."""

    del version


app.command("run")(run_command)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
