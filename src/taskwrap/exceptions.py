"""Custom exception hierarchy for taskwrap.

All exceptions that cross layer boundaries must inherit from
:class:`TaskwrapError`.  Raw OS errors (e.g. from :mod:`subprocess`)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
TaskwrapError
├── DeclarationError
│   ├── DuplicateTargetError
│   ├── UnknownTargetError
│   ├── CyclicDependencyError
│   ├── UndefinedVariableError
│   ├── InvalidOverrideError
│   ├── RegistrySealedError
│   └── UsageError
├── ActionFailure
├── CommandNotFoundError
├── RunTerminatedError
└── EnvironmentError
"""

from __future__ import annotations

import signal as _signal
from collections.abc import Sequence


class TaskwrapError(Exception):
    """Base exception for all taskwrap errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Declaration / request validation ---------------------------------------

class DeclarationError(TaskwrapError):
    """Raised when the request or the target declarations are malformed.

    Every subclass is raised before any subprocess starts.
    """


class DuplicateTargetError(DeclarationError):
    """Raised when two targets are declared with the same name."""


class UnknownTargetError(DeclarationError):
    """Raised when a requested or depended-upon target is not registered."""


class CyclicDependencyError(DeclarationError):
    """Raised when the dependency graph contains a reachable cycle."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle: tuple[str, ...] = tuple(cycle)
        """Target names along the cycle; first and last entries are equal."""
        super().__init__(
            f"Circular dependency: {' -> '.join(self.cycle)}",
            hint="Remove one of the dependencies listed above.",
        )


class UndefinedVariableError(DeclarationError):
    """Raised when an action references a variable that was never defined."""

    def __init__(self, variable: str, *, target: str | None = None) -> None:
        self.variable: str = variable
        self.target: str | None = target
        where = f" in the action of target '{target}'" if target else ""
        super().__init__(
            f"Undefined variable '{variable}'{where}",
            hint=f"Define it on the command line: {variable}=<value>",
        )


class InvalidOverrideError(DeclarationError):
    """Raised when a ``KEY=value`` override cannot be parsed."""


class RegistrySealedError(DeclarationError):
    """Raised when the registry is modified after initialization."""


class UsageError(DeclarationError):
    """Raised when the command line itself cannot be parsed."""


# --- Execution -------------------------------------------------------------

class ActionFailure(TaskwrapError):
    """Raised when a target's command reports failure.

    Exactly one of :attr:`returncode` / :attr:`signal` describes the
    failure: a normal non-zero exit, or termination by a signal.
    """

    def __init__(
        self,
        target: str,
        *,
        returncode: int | None = None,
        signal: int | None = None,
        hint: str | None = None,
    ) -> None:
        self.target: str = target
        self.returncode: int | None = returncode
        self.signal: int | None = signal
        super().__init__(
            f"Target '{target}' failed: {self.describe_status()}",
            hint=hint,
        )

    def describe_status(self) -> str:
        """Human-readable form of the underlying failure signal."""
        if self.signal is not None:
            try:
                name = _signal.Signals(self.signal).name
            except ValueError:
                name = str(self.signal)
            return f"terminated by signal {name}"
        return f"exit status {self.returncode}"


class CommandNotFoundError(TaskwrapError):
    """Raised when the program named by a command is not on PATH."""

    def __init__(self, program: str, *, hint: str | None = None) -> None:
        self.program: str = program
        super().__init__(f"Command not found: {program}", hint=hint)


class RunTerminatedError(TaskwrapError):
    """Raised when a termination signal arrives while the plan is running.

    Raising (instead of dying on the default handler) lets
    :func:`subprocess.run` kill and reap the running child first.
    """

    def __init__(self, signal: int) -> None:
        self.signal: int = signal
        try:
            name = _signal.Signals(signal).name
        except ValueError:
            name = str(signal)
        super().__init__(f"Terminated by {name}. The run is incomplete.")


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(TaskwrapError):
    """Raised when a required runtime precondition is not available."""

