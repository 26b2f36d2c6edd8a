"""Core executor — runs an execution plan one target at a time.

The executor delegates each command to a
:class:`~taskwrap.core.protocols.CommandRunner` injected at construction
time.  It is responsible for:

* Expanding and parsing every action in the plan up front.
* Running actions strictly in plan order, one at a time.
* Stopping at the first failure (fail-fast, no retries).

Guarantees
----------
* No ``print()`` — progress is reported through the ``on_start`` callback.
* No :mod:`subprocess` import.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable
from dataclasses import dataclass

from taskwrap.core.config import ResolvedVariables
from taskwrap.core.models import ExecutionPlan, ExecutionResult, Target
from taskwrap.core.protocols import CommandRunner
from taskwrap.core.registry import TargetRegistry
from taskwrap.exceptions import ActionFailure, CommandNotFoundError, DeclarationError

StartCallback = Callable[[Target, str | None], None]
"""Called as ``on_start(target, command)`` before each target runs."""

COMMAND_NOT_FOUND: int = 127
"""Exit status reported when a command's program is missing (shell convention)."""


@dataclass(frozen=True, slots=True)
class PreparedAction:
    """A planned target with its fully expanded command."""

    target: Target
    command: str | None
    """Expanded command line, ``None`` for action-less targets."""

    argv: tuple[str, ...] = ()


class Executor:
    """Runs plans against a registry through a command runner.

    Parameters
    ----------
    registry:
        Sealed target declarations.
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    """

    def __init__(self, registry: TargetRegistry, runner: CommandRunner) -> None:
        self._registry: TargetRegistry = registry
        self._runner: CommandRunner = runner

    # ------------------------------------------------------------------
    # Command construction (pure)
    # ------------------------------------------------------------------

    def prepare(
        self,
        plan: ExecutionPlan,
        variables: ResolvedVariables,
    ) -> list[PreparedAction]:
        """Expand and split the action of every planned target.

        Raises
        ------
        UnknownTargetError
            When the plan names an unregistered target.
        UndefinedVariableError
            When any action references an unresolved variable.
        DeclarationError
            When an expanded action is not a parseable command line.
        """
        prepared: list[PreparedAction] = []
        for name in plan:
            target = self._registry.lookup(name)
            if target.action is None:
                prepared.append(PreparedAction(target=target, command=None))
                continue
            command = variables.expand(target.action, target=target.name)
            try:
                argv = tuple(shlex.split(command))
            except ValueError as exc:
                raise DeclarationError(
                    f"Cannot parse the action of target '{name}': {exc}",
                ) from exc
            prepared.append(PreparedAction(target=target, command=command, argv=argv))
        return prepared

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute(
        self,
        plan: ExecutionPlan,
        variables: ResolvedVariables,
        *,
        on_start: StartCallback | None = None,
        dry_run: bool = False,
    ) -> ExecutionResult:
        """Run every target in *plan*, stopping at the first failure.

        Parameters
        ----------
        plan:
            Output of :meth:`DependencyResolver.plan`.
        variables:
            Values substituted into action templates.
        on_start:
            Optional callback invoked before each target.
        dry_run:
            Report commands through *on_start* without running them.

        Returns
        -------
        ExecutionResult
            ``error`` holds the :class:`ActionFailure` of the target that
            stopped the run, or ``None`` when every target succeeded.
        """
        prepared = self.prepare(plan, variables)
        completed: list[str] = []

        for index, action in enumerate(prepared):
            if on_start is not None:
                on_start(action.target, action.command)
            if action.argv and not dry_run:
                error = self._run_action(action)
                if error is not None:
                    return ExecutionResult(
                        completed=tuple(completed),
                        error=error,
                        skipped=tuple(a.target.name for a in prepared[index + 1:]),
                    )
            completed.append(action.target.name)

        return ExecutionResult(completed=tuple(completed), dry_run=dry_run)

    def _run_action(self, action: PreparedAction) -> ActionFailure | None:
        name = action.target.name
        try:
            returncode = self._runner.run(action.argv)
        except CommandNotFoundError as exc:
            hint = str(exc) if exc.hint is None else f"{exc}\n{exc.hint}"
            return ActionFailure(name, returncode=COMMAND_NOT_FOUND, hint=hint)
        if returncode == 0:
            return None
        if returncode < 0:
            return ActionFailure(name, signal=-returncode)
        return ActionFailure(name, returncode=returncode)
