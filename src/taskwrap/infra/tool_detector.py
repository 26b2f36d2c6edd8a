"""Infrastructure: external tool detection and platform guidance.

This module is responsible for locating the wrapped toolchain on the
system PATH and providing installation guidance when it is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of looking up a tool on PATH.

    Attributes
    ----------
    command : str
        The command that was looked up (e.g. ``"cargo"``).
    found : bool
        Whether the command was located.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the current
        platform.  Empty when the tool is present or unknown.
    """

    command: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(command: str) -> ToolStatus:
    """Look up *command* on PATH.

    *command* may be a bare name searched on PATH or an explicit path.
    Returns a :class:`ToolStatus` regardless of whether the tool is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(command)

    if result is not None:
        return ToolStatus(
            command=command,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return ToolStatus(
        command=command,
        found=False,
        path=None,
        install_commands=install_commands_for(command),
    )


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_RUST_TOOLS = frozenset({"cargo", "rustc", "rustup", "cargo.exe"})


def install_commands_for(command: str) -> tuple[str, ...]:
    """Return install commands for *command* on the current OS.

    Only the Rust toolchain is known; anything else yields ``()``.
    """
    if Path(command).name.lower() not in _RUST_TOOLS:
        return ()
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install Rustlang.Rustup",
            "choco install rustup.install",
        )
    if system == "darwin":
        return (
            "brew install rustup && rustup-init",
            "curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh",
        )
    return ("curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh",)
