"""Tests for the console proxy (cli/console.py).

Coverage:
* Only the CLI's own style tags are stripped in the plain fallback.
* Bracketed text inside commands survives, with and without Rich.
"""

from __future__ import annotations

import sys

import pytest

from taskwrap.cli.console import console, escape, strip_markup


@pytest.fixture
def no_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)


class TestStripMarkup:
    def test_style_tags_removed(self) -> None:
        assert strip_markup("[bold red]Error:[/bold red] boom") == "Error: boom"

    def test_user_brackets_kept(self) -> None:
        assert strip_markup("echo [x] [1/2] [a-z]") == "echo [x] [1/2] [a-z]"

    def test_mixed(self) -> None:
        text = "[bold blue]t[/bold blue]  echo [x]"
        assert strip_markup(text) == "t  echo [x]"


class TestPlainFallback:
    def test_brackets_in_command_survive(
        self, no_rich: None, capsys: pytest.CaptureFixture[str],
    ) -> None:
        console.print(f"[bold blue]t[/bold blue]  {escape('echo [x]')}")
        assert capsys.readouterr().err == "t  echo [x]\n"

    def test_escape_is_identity(self, no_rich: None) -> None:
        assert escape("echo [x]") == "echo [x]"


class TestRich:
    def test_brackets_in_command_survive(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        pytest.importorskip("rich")
        console.print(f"[bold blue]t[/bold blue]  {escape('echo [x]')}")
        assert "t  echo [x]" in capsys.readouterr().err
