"""Domain models for taskwrap.

All models are **frozen** dataclasses — immutable value objects.  They
carry zero I/O and are safe to share between any number of readers.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from taskwrap.exceptions import ActionFailure


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Variable:
    """A named configuration value referenced by action templates."""

    name: str
    """Variable name, also the environment variable that overrides it."""

    default: str
    """Value used when neither an override nor the environment sets it."""

    description: str = ""


# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Target:
    """A named, independently requestable unit of work."""

    name: str
    """Unique name within the registry."""

    dependencies: tuple[str, ...] = ()
    """Targets that must run first, in declared (left-to-right) order."""

    action: str | None = None
    """Command template, or ``None`` for a target that only runs its
    dependencies."""

    phony: bool = True
    """Always-run target.  No freshness check is ever made."""

    description: str = ""


# ---------------------------------------------------------------------------
# Planning / execution
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExecutionPlan:
    """Ordered, duplicate-free sequence of target names to run."""

    targets: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.targets)

    def __len__(self) -> int:
        return len(self.targets)

    def __bool__(self) -> bool:
        return len(self.targets) > 0


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of running an :class:`ExecutionPlan`."""

    completed: tuple[str, ...] = ()
    """Targets whose actions finished successfully, in execution order."""

    error: ActionFailure | None = None
    """The failure that aborted the run, if any."""

    dry_run: bool = False

    skipped: tuple[str, ...] = ()
    """Planned targets that never ran because an earlier one failed."""

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def failed_target(self) -> str | None:
        return self.error.target if self.error is not None else None

    def raise_for_status(self) -> None:
        """Raise the stored :class:`ActionFailure` if the run failed."""
        if self.error is not None:
            raise self.error
