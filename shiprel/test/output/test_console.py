"""Tests for shiprel.output.console module."""

from __future__ import annotations

import pytest

from shiprel.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    """Test Style enum."""

    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.ERROR) == "error"
        assert str(Style.DEFAULT) == "default"

    def test_all_styles_exist(self) -> None:
        expected = {"DEFAULT", "SUCCESS", "ERROR", "WARNING", "INFO", "DIM", "BOLD"}
        assert {s.name for s in Style} == expected


class TestMockConsole:
    """Test MockConsole for testing purposes."""

    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs == [OutputRecord("hello", Style.DEFAULT)]

    def test_tagged_levels(self) -> None:
        console = MockConsole()
        console.info("Current version: 1.2.3")
        console.success("done")
        console.warning("careful")
        console.error("broken")
        assert console.messages == [
            "[INFO] Current version: 1.2.3",
            "[SUCCESS] done",
            "[WARNING] careful",
            "[ERROR] broken",
        ]

    def test_newline(self) -> None:
        console = MockConsole()
        console.newline()
        assert console.messages == [""]

    def test_helpers(self) -> None:
        console = MockConsole()
        console.warning("w")
        console.print("Tag: v1.0.0", Style.DIM)
        assert console.has_warning()
        assert not console.has_error()
        assert not console.has_success()
        assert len(console.find("Tag:")) == 1
        assert console.text == "[WARNING] w\nTag: v1.0.0"

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.info("x")


class TestRichConsole:
    def test_tagged_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("Release v1.2.4 created and pushed!")
        console.error("Working directory is not clean.")

        out = capsys.readouterr().out
        assert "[SUCCESS] Release v1.2.4 created and pushed!" in out
        assert "[ERROR] Working directory is not clean." in out

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("[bold]literal[/bold]")

        assert "[bold]literal[/bold]" in capsys.readouterr().out

    def test_long_lines_are_not_wrapped(self, capsys: pytest.CaptureFixture[str]) -> None:
        url = "https://github.com/some-organization/some-rather-long-repository-name/actions"
        console = RichConsole()
        console.info(f"Check GitHub Actions for release progress: {url}")
        console.print(" M " + "deeply/nested/" * 8 + "file.ts")

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            f"[INFO] Check GitHub Actions for release progress: {url}",
            " M " + "deeply/nested/" * 8 + "file.ts",
        ]
