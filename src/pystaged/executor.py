# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Build linter tasks and run them concurrently."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .classifier import classify
from .config import RunnerOptions, TaskRequest
from .errors import BatchFailure, TaskError
from .logging import get_symbols
from .models import ExecutionResult, SharedContext, TaskDescriptor
from .process import ExecutionOptions, run_process
from .resolver import inject_paths, parse_command, resolve_spec, select_environment

LOGGER = logging.getLogger(__name__)

ProcessRunner = Callable[[str, Sequence[str], ExecutionOptions], Awaitable[ExecutionResult]]


@dataclass(frozen=True, slots=True)
class LintTask:
    """A resolved linter invocation that classifies its own result."""

    descriptor: TaskDescriptor
    options: RunnerOptions
    runner: ProcessRunner = run_process

    @property
    def execution_options(self) -> ExecutionOptions:
        """Return the options passed to the process runner."""

        return ExecutionOptions(
            cwd=self.descriptor.cwd,
            shell=self.descriptor.use_shell,
            prefer_local=True,
            reject=False,
        )

    async def __call__(self, context: SharedContext) -> str:
        """Run the process and return its success message.

        Raises:
            TaskError: If the linter failed or was terminated.
        """

        result = await self.runner(self.descriptor.executable, self.descriptor.argv, self.execution_options)
        return classify(
            self.descriptor.name,
            result,
            context,
            symbols=get_symbols(self.options.use_emoji),
            use_color=self.options.use_color,
        )


def build_descriptors(request: TaskRequest, *, cwd: Path | None = None) -> list[TaskDescriptor]:
    """Return one descriptor per command the request resolves to.

    Args:
        request: Linter entry and the paths it runs against.
        cwd: Working directory of the current process; defaults to :meth:`Path.cwd`.

    Returns:
        list[TaskDescriptor]: Descriptors in declaration order.

    Raises:
        EmptyCommandError: If a command has no executable.
    """

    resolution = resolve_spec(request.spec, request.paths)
    descriptors: list[TaskDescriptor] = []
    for command in resolution.commands:
        executable, args = parse_command(command)
        if request.shell:
            # the shell lexes the command itself; only appended paths are escaped
            executable, args = command.strip(), []
        argv = inject_paths(
            args,
            request.paths,
            paths_embedded=resolution.paths_embedded,
            quote=request.shell,
        )
        environment = select_environment(command, repo_root=request.repo_root, cwd=cwd, shell=request.shell)
        descriptors.append(
            TaskDescriptor(
                name=command,
                executable=executable,
                argv=tuple(argv),
                cwd=environment.cwd,
                use_shell=environment.shell,
            ),
        )
    return descriptors


def build_tasks(
    request: TaskRequest,
    *,
    options: RunnerOptions | None = None,
    runner: ProcessRunner = run_process,
    cwd: Path | None = None,
) -> list[LintTask]:
    """Return runnable tasks for ``request``; nothing is executed yet."""

    resolved_options = options or RunnerOptions()
    return [
        LintTask(descriptor=descriptor, options=resolved_options, runner=runner)
        for descriptor in build_descriptors(request, cwd=cwd)
    ]


def _retrieve_exception(future: asyncio.Future[str]) -> None:
    # failures dropped after the batch rejected must not be reported as unretrieved
    if not future.cancelled():
        future.exception()


async def run_tasks(
    tasks: Sequence[Callable[[SharedContext], Awaitable[str]]],
    context: SharedContext,
    *,
    collect_all: bool = False,
) -> list[str]:
    """Run ``tasks`` concurrently and return their success messages in order.

    All tasks are started in declaration order. By default the first failure
    to complete is raised at once; the remaining tasks keep running on the
    event loop and still update ``context`` when they fail, but their
    messages are dropped. With ``collect_all`` every task is awaited and
    every :class:`TaskError` is raised together as a :class:`BatchFailure`
    in declaration order. Errors that are not task errors, such as a missing
    executable, are raised as-is.

    Args:
        tasks: Callables taking the shared context and returning a success message.
        context: Shared run state.
        collect_all: Raise every failure instead of the first one.

    Returns:
        list[str]: Success messages in declaration order.
    """

    pending = [asyncio.ensure_future(task(context)) for task in tasks]
    for future in pending:
        future.add_done_callback(_retrieve_exception)
    failed = False
    try:
        for next_done in asyncio.as_completed(pending):
            try:
                await next_done
            except Exception:
                if not collect_all:
                    LOGGER.debug("rejecting batch of %d task(s) on first failure", len(pending))
                    raise
                failed = True
    except asyncio.CancelledError:
        for future in pending:
            future.cancel()
        raise

    if not failed:
        return [future.result() for future in pending]

    failures = [future.exception() for future in pending if future.exception() is not None]
    for failure in failures:
        if not isinstance(failure, TaskError):
            raise failure
    raise BatchFailure([failure for failure in failures if isinstance(failure, TaskError)])


@dataclass(frozen=True, slots=True)
class TaskBatch:
    """Tasks resolved from one linter entry, runnable against a shared context."""

    tasks: tuple[LintTask, ...]
    collect_all: bool = False

    async def __call__(self, context: SharedContext) -> list[str]:
        """Run every task; see :func:`run_tasks`."""

        return await run_tasks(self.tasks, context, collect_all=self.collect_all)


def resolve_task_fn(
    request: TaskRequest,
    *,
    options: RunnerOptions | None = None,
    runner: ProcessRunner = run_process,
    cwd: Path | None = None,
) -> TaskBatch:
    """Resolve ``request`` into a batch runner.

    Resolution happens immediately: exceptions from a linter function or an
    empty command are raised here, before any process is started.

    Args:
        request: Linter entry and the paths it runs against.
        options: Presentation and aggregation preferences.
        runner: Coroutine used to execute processes.
        cwd: Working directory of the current process; defaults to :meth:`Path.cwd`.

    Returns:
        TaskBatch: Awaitable callable taking the run's :class:`SharedContext`.
    """

    resolved_options = options or RunnerOptions()
    tasks = build_tasks(request, options=resolved_options, runner=runner, cwd=cwd)
    return TaskBatch(tasks=tuple(tasks), collect_all=resolved_options.collect_all)


def run_linters(
    request: TaskRequest,
    context: SharedContext | None = None,
    *,
    options: RunnerOptions | None = None,
    runner: ProcessRunner = run_process,
) -> list[str]:
    """Synchronously resolve and run ``request``; see :func:`resolve_task_fn`.

    Unlike awaiting the batch directly, this waits for every started process
    to exit before returning or raising.
    """

    batch = resolve_task_fn(request, options=options, runner=runner)
    return asyncio.run(_run_until_settled(batch, context if context is not None else SharedContext()))


async def _run_until_settled(batch: TaskBatch, context: SharedContext) -> list[str]:
    """Await ``batch`` and then every task it left running.

    The batch result or rejection is unchanged; the wait only ensures each
    process has exited and recorded its failure before the loop closes.
    """

    try:
        return await batch(context)
    finally:
        leftovers = asyncio.all_tasks() - {asyncio.current_task()}
        if leftovers:
            await asyncio.gather(*leftovers, return_exceptions=True)


__all__ = [
    "LintTask",
    "ProcessRunner",
    "TaskBatch",
    "build_descriptors",
    "build_tasks",
    "resolve_task_fn",
    "run_linters",
    "run_tasks",
]
