"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from taskwrap.exceptions import EnvironmentError

_STYLES: tuple[str, ...] = (
    "bold red",
    "bold green",
    "bold blue",
    "bold cyan",
    "bold",
    "yellow",
    "green",
    "red",
    "dim",
)
"""Style tags the CLI emits; the plain fallback removes only these."""

_MARKUP_RE = re.compile(r"\[/?(?:" + "|".join(map(re.escape, _STYLES)) + r")\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True, highlight=False)


def strip_markup(text: str) -> str:
    """Remove the CLI's own style tags (``[bold red]`` ... ``[/bold red]``).

    Other bracketed text, such as ``[x]`` inside a command, is kept.
    """
    return _MARKUP_RE.sub("", text)


def escape(text: str) -> str:
    """Escape *text* so square brackets in commands are printed verbatim."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return text
    return rich_escape(text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(
                *(strip_markup(o) if isinstance(o, str) else o for o in objects),
                file=sys.stderr,
            )
            return
        rich_console.print(*objects)


console = _ConsoleProxy()
