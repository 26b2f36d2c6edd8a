"""Tests for dependency resolution (core/resolver.py).

Coverage:
* Dependencies precede dependents; each target appears once.
* Declared (left-to-right) order among dependencies.
* Multi-target requests share one duplicate-free plan.
* Unknown targets and cycles fail without a partial plan.
"""

from __future__ import annotations

import sys

import pytest

from taskwrap.core.registry import TargetRegistry
from taskwrap.core.resolver import DependencyResolver
from taskwrap.exceptions import CyclicDependencyError, UnknownTargetError


def _registry(graph: dict[str, list[str]], default: str | None = None) -> TargetRegistry:
    registry = TargetRegistry()
    for name, deps in graph.items():
        registry.register(name, deps, action=f"echo {name}")
    if default is not None:
        registry.set_default(default)
    return registry


def _assert_topological(plan: tuple[str, ...], graph: dict[str, list[str]]) -> None:
    assert len(plan) == len(set(plan))
    for name in plan:
        for dep in graph[name]:
            assert plan.index(dep) < plan.index(name)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

class TestPlanOrder:
    def test_cargo_scenario(self, cargo_registry: TargetRegistry) -> None:
        plan = DependencyResolver(cargo_registry).plan("all")
        assert plan.targets == ("fmt", "clean", "clippy", "all")

    def test_default_target_when_none_requested(
        self, cargo_registry: TargetRegistry,
    ) -> None:
        plan = DependencyResolver(cargo_registry).plan()
        assert plan.targets == ("fmt", "clean", "clippy", "all")

    def test_leaf_target(self, cargo_registry: TargetRegistry) -> None:
        assert DependencyResolver(cargo_registry).plan("fmt").targets == ("fmt",)

    def test_declared_order_of_dependencies(self) -> None:
        graph = {"a": [], "b": [], "c": [], "top": ["c", "a", "b"]}
        plan = DependencyResolver(_registry(graph)).plan("top")
        assert plan.targets == ("c", "a", "b", "top")

    def test_diamond_runs_shared_dependency_once(self) -> None:
        graph = {"base": [], "left": ["base"], "right": ["base"], "top": ["left", "right"]}
        plan = DependencyResolver(_registry(graph)).plan("top")
        assert plan.targets == ("base", "left", "right", "top")
        _assert_topological(plan.targets, graph)

    def test_deep_graph_is_topological(self) -> None:
        graph = {
            "a": [],
            "b": ["a"],
            "c": ["b", "a"],
            "d": ["c"],
            "e": ["d", "b"],
            "f": ["e", "c", "a"],
        }
        plan = DependencyResolver(_registry(graph)).plan("f")
        _assert_topological(plan.targets, graph)
        assert set(plan.targets) == set(graph)

    def test_deterministic(self, cargo_registry: TargetRegistry) -> None:
        resolver = DependencyResolver(cargo_registry)
        assert resolver.plan("all") == resolver.plan("all")


# ---------------------------------------------------------------------------
# Multiple requested targets
# ---------------------------------------------------------------------------

class TestMultiTarget:
    def test_concatenated_without_duplicates(
        self, cargo_registry: TargetRegistry,
    ) -> None:
        plan = DependencyResolver(cargo_registry).plan("clippy", "all")
        assert plan.targets == ("clean", "clippy", "fmt", "all")

    def test_same_target_twice_runs_once(self, cargo_registry: TargetRegistry) -> None:
        plan = DependencyResolver(cargo_registry).plan("fmt", "fmt")
        assert plan.targets == ("fmt",)

    def test_request_order_is_kept(self, cargo_registry: TargetRegistry) -> None:
        plan = DependencyResolver(cargo_registry).plan("fmt", "clean")
        assert plan.targets == ("fmt", "clean")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestUnknownTargets:
    def test_unknown_requested(self, cargo_registry: TargetRegistry) -> None:
        with pytest.raises(UnknownTargetError, match="lint"):
            DependencyResolver(cargo_registry).plan("lint")

    def test_unknown_after_valid_request(self, cargo_registry: TargetRegistry) -> None:
        with pytest.raises(UnknownTargetError):
            DependencyResolver(cargo_registry).plan("fmt", "lint")

    def test_unknown_dependency_names_dependent(self) -> None:
        registry = _registry({"top": ["missing"]})
        with pytest.raises(UnknownTargetError) as exc_info:
            DependencyResolver(registry).plan("top")
        assert "missing" in str(exc_info.value)
        assert "top" in str(exc_info.value)


class TestCycles:
    def test_self_cycle(self) -> None:
        registry = _registry({"a": ["a"]})
        with pytest.raises(CyclicDependencyError) as exc_info:
            DependencyResolver(registry).plan("a")
        assert exc_info.value.cycle == ("a", "a")

    def test_two_node_cycle(self) -> None:
        registry = _registry({"a": ["b"], "b": ["a"]})
        with pytest.raises(CyclicDependencyError) as exc_info:
            DependencyResolver(registry).plan("a")
        assert exc_info.value.cycle == ("a", "b", "a")

    def test_cycle_path_excludes_entry_prefix(self) -> None:
        registry = _registry({"top": ["x"], "x": ["y"], "y": ["z"], "z": ["x"]})
        with pytest.raises(CyclicDependencyError) as exc_info:
            DependencyResolver(registry).plan("top")
        assert exc_info.value.cycle == ("x", "y", "z", "x")
        assert "x -> y -> z -> x" in str(exc_info.value)

    def test_unreachable_cycle_is_ignored(self) -> None:
        registry = _registry({"ok": [], "a": ["b"], "b": ["a"]})
        assert DependencyResolver(registry).plan("ok").targets == ("ok",)

    def test_cycle_in_second_request(self) -> None:
        registry = _registry({"ok": [], "a": ["b"], "b": ["a"]})
        with pytest.raises(CyclicDependencyError):
            DependencyResolver(registry).plan("ok", "a")


class TestDeepGraphs:
    def test_chain_deeper_than_recursion_limit(self) -> None:
        depth = sys.getrecursionlimit() * 3
        registry = TargetRegistry()
        registry.register("step0")
        for i in range(1, depth):
            registry.register(f"step{i}", [f"step{i - 1}"])

        plan = DependencyResolver(registry).plan(f"step{depth - 1}")

        assert len(plan) == depth
        assert plan.targets[0] == "step0"
        assert plan.targets[-1] == f"step{depth - 1}"

    def test_cycle_at_the_end_of_a_deep_chain(self) -> None:
        depth = sys.getrecursionlimit() * 2
        registry = TargetRegistry()
        registry.register("step0", [f"step{depth - 1}"])
        for i in range(1, depth):
            registry.register(f"step{i}", [f"step{i - 1}"])

        with pytest.raises(CyclicDependencyError) as exc_info:
            DependencyResolver(registry).plan(f"step{depth - 1}")
        assert len(exc_info.value.cycle) == depth + 1
