# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concurrent linter task engine for pre-commit style runners."""

from __future__ import annotations

from importlib import metadata

from .config import RunnerOptions, TaskRequest
from .errors import BatchFailure, LintFailureError, TaskError, TerminatedError
from .executor import resolve_task_fn, run_linters, run_tasks
from .models import SharedContext

__all__ = [
    "BatchFailure",
    "LintFailureError",
    "RunnerOptions",
    "SharedContext",
    "TaskError",
    "TaskRequest",
    "TerminatedError",
    "__version__",
    "resolve_task_fn",
    "run_linters",
    "run_tasks",
]

try:
    __version__ = metadata.version("pystaged")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
