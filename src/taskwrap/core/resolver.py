"""Dependency resolution — turns requested targets into an execution plan.

The plan is a depth-first topological ordering: each target's
dependencies are visited in their declared order and emitted before the
target itself.  The walk uses an explicit stack, so chain depth is not
bounded by the interpreter's recursion limit.  A target reachable along
several paths is emitted once.  The whole plan is computed before
anything executes, so an unknown name or a cycle never leaves a
half-finished run behind.
"""

from __future__ import annotations

from collections.abc import Iterator

from taskwrap.core.models import ExecutionPlan
from taskwrap.core.registry import TargetRegistry
from taskwrap.exceptions import CyclicDependencyError, UnknownTargetError

_IN_PROGRESS = 1
_DONE = 2


class DependencyResolver:
    """Computes :class:`ExecutionPlan` values against a sealed registry.

    Parameters
    ----------
    registry:
        The target declarations.  The resolver keeps no per-plan state
        on the instance, so one resolver may serve many requests.
    """

    def __init__(self, registry: TargetRegistry) -> None:
        self._registry: TargetRegistry = registry

    def plan(self, *target_names: str) -> ExecutionPlan:
        """Return the ordered, duplicate-free plan for *target_names*.

        With no names the registry's default target is planned.  Several
        names produce one concatenated plan, each name's dependencies
        preceding it.

        Raises
        ------
        UnknownTargetError
            When a requested or transitively required target is missing.
        CyclicDependencyError
            When a cycle is reachable from a requested target.
        """
        requested = target_names or (self._registry.default,)
        marks: dict[str, int] = {}
        order: list[str] = []

        for root in requested:
            if marks.get(root) == _DONE:
                continue
            # (name, remaining dependencies); the stack is the current path.
            stack: list[tuple[str, Iterator[str]]] = [self._enter(root, marks, None)]
            while stack:
                name, remaining = stack[-1]
                for dependency in remaining:
                    mark = marks.get(dependency)
                    if mark == _DONE:
                        continue
                    if mark == _IN_PROGRESS:
                        path = [entry for entry, _ in stack]
                        start = path.index(dependency)
                        raise CyclicDependencyError([*path[start:], dependency])
                    stack.append(self._enter(dependency, marks, name))
                    break
                else:
                    stack.pop()
                    marks[name] = _DONE
                    order.append(name)

        return ExecutionPlan(targets=tuple(order))

    def _enter(
        self,
        name: str,
        marks: dict[str, int],
        needed_by: str | None,
    ) -> tuple[str, Iterator[str]]:
        """Look up *name*, mark it in progress, return its stack frame."""
        if name not in self._registry and needed_by is not None:
            raise UnknownTargetError(
                f"No target named '{name}' (needed by '{needed_by}')",
            )
        target = self._registry.lookup(name)
        marks[name] = _IN_PROGRESS
        return name, iter(target.dependencies)
