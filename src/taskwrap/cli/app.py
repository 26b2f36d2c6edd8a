"""CLI application entry point and command routing for taskwrap.

This module is the **sole error boundary** for the entire application.
It catches :class:`~taskwrap.exceptions.TaskwrapError`, ``KeyboardInterrupt``,
SIGTERM (as :class:`~taskwrap.exceptions.RunTerminatedError`), and any
unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — planning and execution are delegated
  to the core layer, process handling to the infrastructure layer.
* The whole request (targets, dependencies, variable references) is
  validated before the first command runs.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import os
import signal
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import FrameType
from typing import NoReturn

from taskwrap.cli import exit_codes
from taskwrap.cli.console import console, escape
from taskwrap.core.config import ConfigResolver, is_override
from taskwrap.core.models import Target
from taskwrap.exceptions import (
    ActionFailure,
    DeclarationError,
    RunTerminatedError,
    TaskwrapError,
    UsageError,
)
from taskwrap.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Raises :class:`UsageError` instead of exiting with status 2.

    A malformed command line is a bad request, reported with the same
    exit code as an unknown target.
    """

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=self.format_usage().strip())


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Positional arguments are target names, or ``NAME=value`` variable
    overrides in the style of ``make``.
    """
    parser = _ArgumentParser(
        prog="taskwrap",
        description="Run named targets and their dependencies, in order.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Print the commands that would run, without running them.",
    )
    parser.add_argument(
        "-s",
        "--silent",
        action="store_true",
        help="Do not echo commands before running them.",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List the declared targets and variables, then exit.",
    )
    parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        default=None,
        metavar="DIR",
        help="Run every command in DIR.",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Check that the wrapped toolchain is available.",
    )
    parser.add_argument(
        "arguments",
        nargs="*",
        metavar="TARGET | NAME=value",
        help="Targets to run (default target when omitted) and variable overrides.",
    )
    return parser


def _split_arguments(arguments: list[str]) -> tuple[list[str], list[str]]:
    """Separate target names from ``NAME=value`` overrides, keeping order."""
    targets = [arg for arg in arguments if not is_override(arg)]
    overrides = [arg for arg in arguments if is_override(arg)]
    return targets, overrides


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _echo_command(target: Target, command: str | None) -> None:
    """Show the command about to run, as ``make`` does."""
    if command is None:
        return
    console.print(f"[bold blue]{target.name}[/bold blue]  {escape(command)}")


def _handle_run(
    targets: list[str],
    resolver: ConfigResolver,
    args: argparse.Namespace,
) -> int:
    """Plan the requested targets, then execute the plan.

    Flow:
    1. Build the registry and resolve variables.
    2. Compute the full plan (unknown targets and cycles fail here).
    3. Execute, fail-fast; every action is expanded before the first runs.
    """
    from taskwrap.core.executor import Executor
    from taskwrap.core.resolver import DependencyResolver
    from taskwrap.core.targets import build_default_registry
    from taskwrap.infra.subprocess_runner import SubprocessRunner

    registry = build_default_registry()
    variables = resolver.resolve_all(registry.variables)
    plan = DependencyResolver(registry).plan(*targets)

    executor = Executor(registry, SubprocessRunner(cwd=args.directory))
    echo = None if args.silent and not args.dry_run else _echo_command
    result = executor.execute(plan, variables, on_start=echo, dry_run=args.dry_run)
    result.raise_for_status()

    if not args.silent and not args.dry_run:
        console.print(
            f"[bold green]Done.[/bold green]  {' '.join(result.completed)}"
        )
    return exit_codes.SUCCESS


def _handle_list(resolver: ConfigResolver) -> int:
    """Dispatch the ``--list`` command."""
    from taskwrap.cli.target_table import show_targets
    from taskwrap.core.targets import build_default_registry

    registry = build_default_registry()
    show_targets(registry, resolver.resolve_all(registry.variables))
    return exit_codes.SUCCESS


def _handle_doctor(resolver: ConfigResolver) -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from taskwrap.cli.doctor import run_doctor
    from taskwrap.core.targets import VARIABLES

    return run_doctor(resolver.resolve_all(VARIABLES))


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the taskwrap CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)

    targets, overrides = _split_arguments(args.arguments)
    resolver = ConfigResolver.from_arguments(overrides, os.environ)

    if args.doctor:
        return _handle_doctor(resolver)

    if args.list:
        return _handle_list(resolver)

    return _handle_run(targets, resolver, args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _report(exc: TaskwrapError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def _raise_terminated(signum: int, _frame: FrameType | None) -> None:
    raise RunTerminatedError(signum)


@contextmanager
def _terminate_on_signal() -> Iterator[None]:
    """Turn SIGTERM into :class:`RunTerminatedError` for the enclosed block.

    The exception unwinds through :func:`subprocess.run`, which kills and
    waits on the running child before re-raising.  The previous handler
    is restored on exit.
    """
    previous = signal.signal(signal.SIGTERM, _raise_terminated)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        with _terminate_on_signal():
            code = main(argv)
        sys.exit(code)
    except RunTerminatedError as exc:
        console.print(f"\n[yellow]{escape(str(exc))}[/yellow]")
        sys.exit(exit_codes.TERMINATED)
    except DeclarationError as exc:
        _report(exc)
        sys.exit(exit_codes.DECLARATION_ERROR)
    except ActionFailure as exc:
        _report(exc)
        sys.exit(exit_codes.ACTION_FAILED)
    except TaskwrapError as exc:
        _report(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user. The run is incomplete.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
