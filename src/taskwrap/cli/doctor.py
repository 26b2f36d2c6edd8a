"""``taskwrap --doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run the declared targets.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from taskwrap.cli import exit_codes
from taskwrap.cli.console import console
from taskwrap.core.config import ResolvedVariables
from taskwrap.infra.tool_detector import ToolStatus, detect_tool
from taskwrap.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    py_version = platform.python_version()
    ok = sys.version_info >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", py_version, status


def _tool_check(status_obj: ToolStatus) -> tuple[str, str, str]:
    """Return (label, value, status) for the wrapped tool row.

    A missing tool is a failure: every built-in action invokes it.
    """
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return status_obj.command, path_str, "[green]OK[/green]"
    return status_obj.command, "not found", "[red]FAIL[/red]"


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Rich row."""
    try:
        return "rich", version("rich"), "[green]OK[/green]"
    except PackageNotFoundError:
        return "rich", "NOT INSTALLED", "[yellow]WARN[/yellow]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ntaskwrap doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(variables: ResolvedVariables, tool_variable: str = "CARGO") -> int:
    """Execute all diagnostic checks and render a summary table.

    Parameters
    ----------
    variables:
        Resolved configuration; the tool is looked up as configured.
    tool_variable:
        Name of the variable holding the wrapped tool's path.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    tool_status = detect_tool(variables.get(tool_variable, "cargo"))
    checks = [
        ("taskwrap", __version__, "[green]OK[/green]"),
        _python_version_check(),
        _tool_check(tool_status),
        _rich_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        table = Table(
            title="taskwrap doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)
        console.print()
        console.print(table)
        console.print()

    if not tool_status.found and tool_status.install_commands:
        console.print(f"[yellow]{tool_status.command} is not installed.[/yellow]")
        console.print("Install using one of the following commands:\n")
        for cmd in tool_status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
