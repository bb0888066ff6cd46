"""Tests for forge.output.console module."""

from __future__ import annotations

import pytest

from forge.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_levels_are_prefixed(self) -> None:
        console = MockConsole()
        console.info("applying")
        console.warning("careful")
        console.error("broken")
        console.debug("details")

        assert console.messages == [
            "info: applying",
            "warning: careful",
            "error: broken",
            "debug: details",
        ]
        assert console.has_error()
        assert console.has_warning()

    def test_print_keeps_style(self) -> None:
        console = MockConsole()
        console.print("\tx", Style.DIM)
        assert console.outputs[0].style == Style.DIM
        assert console.outputs[0].message == "\tx"

    def test_find_and_clear(self) -> None:
        console = MockConsole()
        console.info("Total build time: 3 seconds.")
        assert len(console.find("Total build time")) == 1
        console.clear()
        assert console.messages == []

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.newline()


class TestRichConsole:
    def test_debug_hidden_unless_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().debug("hidden detail")
        RichConsole(verbose=True).debug("shown detail")

        out = capsys.readouterr().out
        assert "hidden detail" not in out
        assert "shown detail" in out

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().info("[bold]literal[/bold]")
        RichConsole().print("[dim]mach[/dim]")

        out = capsys.readouterr().out
        assert "[bold]literal[/bold]" in out
        assert "[dim]mach[/dim]" in out
