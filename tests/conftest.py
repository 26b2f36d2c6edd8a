"""Shared pytest fixtures and configuration for the taskwrap test suite.

Guidelines
----------
* No real toolchain — commands go through a recording fake runner, or
  :func:`subprocess.run` is mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on the caller's environment variables.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import pytest

from taskwrap.core.registry import TargetRegistry
from taskwrap.core.targets import VARIABLES


class RecordingRunner:
    """Fake :class:`CommandRunner` that records argv and replays return codes.

    *results* maps a program argument (``argv[1]``, e.g. ``"clean"``) to
    the return code to report; anything else returns 0.
    """

    def __init__(self, results: Mapping[str, int] | None = None) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._results: dict[str, int] = dict(results or {})

    def run(self, argv: Sequence[str]) -> int:
        self.calls.append(tuple(argv))
        key = argv[1] if len(argv) > 1 else argv[0]
        return self._results.get(key, 0)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in VARIABLES:
        monkeypatch.delenv(var.name, raising=False)


@pytest.fixture
def cargo_registry() -> TargetRegistry:
    """clean, fmt, clippy(clean), all(fmt, clippy) — ``all`` is the default."""
    registry = TargetRegistry(VARIABLES)
    registry.register("clean", action="$(CARGO) clean --package $(PACKAGE)")
    registry.register("fmt", action="$(CARGO) fmt")
    registry.register("clippy", ["clean"], action="$(CARGO) clippy -- -D warnings")
    registry.register("all", ["fmt", "clippy"])
    registry.set_default("all")
    return registry.seal()


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_runner() -> type[RecordingRunner]:
    """Factory for runners with scripted return codes."""
    return RecordingRunner
