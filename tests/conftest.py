# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

import pytest

from pystaged.models import ExecutionResult
from pystaged.process import ExecutionOptions


@dataclass
class FakeRunner:
    """Process runner returning canned results keyed by executable name."""

    results: Mapping[str, ExecutionResult] = field(default_factory=dict)
    delays: Mapping[str, float] = field(default_factory=dict)
    calls: list[tuple[str, tuple[str, ...], ExecutionOptions]] = field(default_factory=list)

    async def __call__(self, executable: str, argv: Sequence[str], options: ExecutionOptions) -> ExecutionResult:
        self.calls.append((executable, tuple(argv), options))
        await asyncio.sleep(self.delays.get(executable, 0))
        return self.results.get(executable, ExecutionResult())


@pytest.fixture
def fake_runner() -> Callable[..., FakeRunner]:
    """Return a factory building :class:`FakeRunner` instances."""

    def _factory(
        results: Mapping[str, ExecutionResult] | None = None,
        delays: Mapping[str, float] | None = None,
    ) -> FakeRunner:
        return FakeRunner(results=dict(results or {}), delays=dict(delays or {}))

    return _factory


@pytest.fixture(autouse=True)
def _clear_pystaged_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PYSTAGED_EMOJI", "PYSTAGED_COLOR", "PYSTAGED_COLLECT_ALL", "PYSTAGED_DEBUG"):
        monkeypatch.delenv(name, raising=False)
