# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Asynchronous wrappers around external process execution."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import shutil
import signal as signal_module
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ProcessExecutionError
from .models import ExecutionResult

LOGGER = logging.getLogger(__name__)

WINDOWS_OS_NAME: Final[str] = "nt"
VENV_DIR_NAMES: Final[tuple[str, ...]] = (".venv", "venv")


@dataclass(frozen=True, slots=True)
class ExecutionOptions:
    """Options applied when spawning a linter process."""

    cwd: Path | None = None
    shell: bool = False
    prefer_local: bool = True
    reject: bool = False
    env: Mapping[str, str] | None = None


def find_venv_bin(root: Path) -> Path | None:
    """Return the nearest virtualenv ``bin``/``Scripts`` directory above ``root``."""

    for candidate in (root, *root.parents):
        for name in VENV_DIR_NAMES:
            bin_dir = candidate / name / ("Scripts" if os.name == WINDOWS_OS_NAME else "bin")
            if bin_dir.is_dir():
                return bin_dir
    return None


def local_bin_dirs(root: Path) -> list[Path]:
    """Return project-local binary directories ordered from most to least specific.

    Every ``node_modules/.bin`` between ``root`` and the filesystem root is
    included, followed by the closest virtualenv binary directory.

    Args:
        root: Directory the process will run in.

    Returns:
        list[Path]: Existing directories to place in front of ``PATH``.
    """

    resolved = root.resolve()
    directories = [
        candidate / "node_modules" / ".bin"
        for candidate in (resolved, *resolved.parents)
        if (candidate / "node_modules" / ".bin").is_dir()
    ]
    venv_bin = find_venv_bin(resolved)
    if venv_bin is not None:
        directories.append(venv_bin)
    return directories


def build_local_env(cwd: Path | None = None, env: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return a copy of ``env`` whose ``PATH`` prefers project-local binaries.

    Args:
        cwd: Working directory of the process; defaults to the current directory.
        env: Base environment; defaults to :data:`os.environ`.

    Returns:
        dict[str, str]: Environment mapping with the local directories prepended.
    """

    merged: MutableMapping[str, str] = dict(os.environ if env is None else env)
    local_dirs = [str(path) for path in local_bin_dirs(cwd or Path.cwd())]
    if local_dirs:
        current = merged.get("PATH", "")
        merged["PATH"] = os.pathsep.join([*local_dirs, current] if current else local_dirs)
    return dict(merged)


def resolve_executable(executable: str, env: Mapping[str, str], cwd: Path | None = None) -> str:
    """Return the path of ``executable`` using the ``PATH`` from ``env``.

    Raises:
        FileNotFoundError: If the executable cannot be found.
    """

    head_path = Path(executable)
    if head_path.is_absolute():
        return str(head_path)
    if os.path.dirname(executable):
        # relative paths such as ``./scripts/check`` resolve against the working directory
        return str((cwd or Path.cwd()) / head_path)
    resolved = shutil.which(executable, path=env.get("PATH"))
    if resolved is None:
        msg = f"Executable '{executable}' was not found on PATH"
        raise FileNotFoundError(msg)
    return resolved


def signal_name(returncode: int | None) -> str | None:
    """Return the signal name for a negative POSIX return code."""

    if returncode is None or returncode >= 0:
        return None
    try:
        return signal_module.Signals(-returncode).name
    except ValueError:
        return f"SIG{-returncode}"


def _decode(payload: bytes | None) -> str:
    if not payload:
        return ""
    return payload.decode("utf-8", errors="replace").removesuffix("\n").removesuffix("\r")


async def run_process(
    executable: str,
    argv: Sequence[str],
    options: ExecutionOptions | None = None,
) -> ExecutionResult:
    """Run ``executable`` with ``argv`` and describe how it finished.

    Non-zero exit codes and signal terminations are reported on the returned
    :class:`ExecutionResult`. Only failures to start the process propagate.

    Args:
        executable: Program name or path.
        argv: Arguments passed to the program. With ``options.shell`` they are
            joined to ``executable`` with spaces and interpreted by the system shell.
        options: Execution options; defaults to :class:`ExecutionOptions`.

    Returns:
        ExecutionResult: Captured output and termination details.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        ProcessExecutionError: When ``options.reject`` is set and the process failed.
    """

    resolved_options = options or ExecutionOptions()
    LOGGER.debug("cmd: %s", executable)
    LOGGER.debug("args: %s", list(argv))
    LOGGER.debug("options: %s", resolved_options)

    if resolved_options.prefer_local:
        env = build_local_env(resolved_options.cwd, resolved_options.env)
    else:
        env = dict(os.environ if resolved_options.env is None else resolved_options.env)
    cwd = str(resolved_options.cwd) if resolved_options.cwd is not None else None

    if resolved_options.shell:
        # tokens reach the shell as written; callers quote what must stay literal
        command_line = " ".join([executable, *argv])
        process = await asyncio.create_subprocess_shell(
            command_line,
            cwd=cwd,
            env=env,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    else:
        program = resolve_executable(executable, env, resolved_options.cwd)
        process = await asyncio.create_subprocess_exec(
            program,
            *argv,
            cwd=cwd,
            env=env,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

    try:
        stdout_bytes, stderr_bytes = await process.communicate()
    finally:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
    returncode = process.returncode
    terminated_by = signal_name(returncode)
    result = ExecutionResult(
        stdout=_decode(stdout_bytes),
        stderr=_decode(stderr_bytes),
        failed=returncode != 0,
        killed=False,
        signal=terminated_by,
        returncode=returncode,
    )
    LOGGER.debug("finished %s: returncode=%s signal=%s", executable, returncode, terminated_by)

    if resolved_options.reject and result.failed:
        raise ProcessExecutionError([executable, *argv], returncode, result.stdout, result.stderr)
    return result


__all__ = [
    "ExecutionOptions",
    "build_local_env",
    "find_venv_bin",
    "local_bin_dirs",
    "resolve_executable",
    "run_process",
    "signal_name",
]
