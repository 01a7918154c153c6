"""Tests for brewdiag.output.console module."""

from __future__ import annotations

import pytest

from brewdiag.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.WARNING) == "warning"
        assert str(Style.DEFAULT) == "default"


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        assert console.messages == ["OK done", "Error: broken", "Warning: careful"]

    def test_has_error_and_warning(self) -> None:
        console = MockConsole()
        assert not console.has_error()
        console.warning("careful")
        assert console.has_warning()
        assert not console.has_error()

    def test_text_and_find(self) -> None:
        console = MockConsole()
        console.print("Checks")
        console.newline()
        console.print("check_xcode_prefix")
        assert console.text == "Checks\n\ncheck_xcode_prefix"
        assert [o.message for o in console.find("xcode")] == ["check_xcode_prefix"]

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("ok")


class TestRichConsole:
    def test_markup_is_not_interpreted(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("[bold]not markup[/bold]", Style.DIM)
        assert "[bold]not markup[/bold]" in capsys.readouterr().out

    def test_warning_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().warning("Your Xcode (16.0) is outdated.")
        assert "Warning: Your Xcode (16.0) is outdated." in capsys.readouterr().out

    def test_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(stderr=True).error("boom")
        assert "Error: boom" in capsys.readouterr().err
