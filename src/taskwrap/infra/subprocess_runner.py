""":mod:`subprocess` backed implementation of :class:`~taskwrap.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that starts child
processes.  OS errors are caught here and re-raised as
:class:`~taskwrap.exceptions.TaskwrapError` subclasses.
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from taskwrap.exceptions import CommandNotFoundError, EnvironmentError
from taskwrap.infra.tool_detector import install_commands_for


class SubprocessRunner:
    """Concrete :class:`CommandRunner` that runs commands without a shell.

    The child inherits stdin/stdout/stderr, so the wrapped tool's output
    goes straight to the terminal.  Its output is never captured or
    parsed.

    Parameters
    ----------
    cwd:
        Working directory for every command; the current directory
        when ``None``.
    env:
        Environment for the child; inherited when ``None``.
    """

    def __init__(
        self,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        if cwd is not None and not cwd.is_dir():
            raise EnvironmentError(f"Directory does not exist: {cwd}")
        self._cwd: Path | None = cwd
        self._env: dict[str, str] | None = dict(env) if env is not None else None

    def run(self, argv: Sequence[str]) -> int:
        """Run *argv* to completion and return its return code.

        A ``KeyboardInterrupt`` while waiting kills the child and
        propagates to the caller.

        Raises
        ------
        CommandNotFoundError
            When ``argv[0]`` does not exist or is not executable.
        """
        program = argv[0]
        try:
            completed = subprocess.run(
                list(argv),
                cwd=self._cwd,
                env=self._env,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CommandNotFoundError(program, hint=_install_hint(program)) from exc
        except PermissionError as exc:
            raise CommandNotFoundError(
                program,
                hint=f"'{program}' is not executable.",
            ) from exc
        return completed.returncode


def _install_hint(program: str) -> str | None:
    commands = install_commands_for(program)
    if not commands:
        return None
    lines = [f"Install {Path(program).name} using one of:"]
    lines.extend(f"  {cmd}" for cmd in commands)
    return "\n".join(lines)
