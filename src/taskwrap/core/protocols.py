"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class CommandRunner(Protocol):
    """Contract for running one external command to completion.

    Any object that implements :meth:`run` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def run(self, argv: Sequence[str]) -> int:
        """Run *argv* and block until it exits.

        Returns
        -------
        int
            The process return code.  Negative values mean the process
            was terminated by that signal number (POSIX convention of
            :attr:`subprocess.CompletedProcess.returncode`).

        Raises
        ------
        CommandNotFoundError
            When ``argv[0]`` cannot be located.
        """
        ...  # pragma: no cover
