"""``taskwrap --list`` — render the declared targets and variables.

Purely presentational: reads the registry and the resolved variables,
renders a Rich table (or plain text when Rich is missing).
"""

from __future__ import annotations

import sys
from typing import Any

from taskwrap.cli.console import console, escape
from taskwrap.core.config import ResolvedVariables
from taskwrap.core.registry import TargetRegistry


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def _target_rows(registry: TargetRegistry) -> list[tuple[str, str, str, str]]:
    """Return (name, dependencies, action, description) for every target."""
    rows: list[tuple[str, str, str, str]] = []
    for target in registry:
        name = target.name
        if name == registry.default:
            name = f"{name} (default)"
        deps = ", ".join(target.dependencies) or "—"
        action = target.action if target.action is not None else "—"
        rows.append((name, deps, action, target.description))
    return rows


def _variable_rows(
    registry: TargetRegistry,
    variables: ResolvedVariables,
) -> list[tuple[str, str, str]]:
    """Return (name, value, default) for every declared variable."""
    return [
        (var.name, variables.get(var.name, var.default), var.default)
        for var in registry.variables
    ]


def _import_rich_table() -> type[Any] | None:
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return None
    return Table


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _print_plain(
    targets: list[tuple[str, str, str, str]],
    variables: list[tuple[str, str, str]],
) -> None:
    print("\nTargets", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for name, deps, action, _ in targets:
        print(f"{name:<18} {deps:<16} {action}", file=sys.stderr)
    print("\nVariables", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for name, value, default in variables:
        print(f"{name:<18} {value:<24} (default: {default})", file=sys.stderr)
    print(file=sys.stderr)


def show_targets(registry: TargetRegistry, variables: ResolvedVariables) -> None:
    """Print every declared target and variable."""
    target_rows = _target_rows(registry)
    variable_rows = _variable_rows(registry, variables)

    table_class = _import_rich_table()
    if table_class is None:
        _print_plain(target_rows, variable_rows)
        return

    targets = table_class(
        title="Targets",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    targets.add_column("Target", style="bold", min_width=10)
    targets.add_column("Depends on", min_width=10)
    targets.add_column("Action", min_width=20)
    targets.add_column("Description")
    for name, deps, action, description in target_rows:
        targets.add_row(name, deps, escape(action), description)

    table = table_class(
        title="Variables",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Variable", style="bold", min_width=10)
    table.add_column("Value", min_width=20)
    table.add_column("Default", style="dim")
    for name, value, default in variable_rows:
        table.add_row(name, escape(value), escape(default))

    console.print()
    console.print(targets)
    console.print(table)
    console.print()
