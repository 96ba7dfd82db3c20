"""Unit tests for CLI output formatting and error handling."""

from __future__ import annotations

import json

import pytest

from gitdesk.cli.common import cli_error_handler
from gitdesk.cli.context import ExitCode
from gitdesk.cli.output import (
    OutputFormat,
    format_error,
    format_json,
    format_success,
    format_table,
)
from gitdesk.exceptions import EngineError, SshError


class TestFormatting:
    def test_output_format_values(self) -> None:
        assert [f.value for f in OutputFormat] == ["text", "json"]

    def test_format_error_with_details(self) -> None:
        text = format_error(
            "Invalid configuration",
            details=["Field: engine.block_timeout_seconds"],
            suggestion="Use at least 300",
        )
        assert text.splitlines() == [
            "Error: Invalid configuration",
            "  Field: engine.block_timeout_seconds",
            "Suggestion: Use at least 300",
        ]

    def test_format_success(self) -> None:
        assert format_success("Files staged") == "Success: Files staged"

    def test_format_json_keeps_unicode(self) -> None:
        text = format_json({"message": "Grüße"})
        assert "Grüße" in text
        assert json.loads(text) == {"message": "Grüße"}

    def test_format_table(self) -> None:
        table = format_table(
            ["Name", "Path"], [["demo", "/work/demo"], ["a", "/b"]]
        )
        assert table.splitlines() == [
            "Name | Path",
            "demo | /work/demo",
            "a    | /b",
        ]

    def test_format_table_without_headers(self) -> None:
        assert format_table([], [["x"]]) == ""


class TestCliErrorHandler:
    def test_keyboard_interrupt(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info, cli_error_handler():
            raise KeyboardInterrupt()

        assert exc_info.value.code == ExitCode.INTERRUPTED
        assert "Interrupted by user" in capsys.readouterr().err

    def test_git_error_shows_operation(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info, cli_error_handler():
            raise EngineError("fatal: not a git repository", operation="status")

        assert exc_info.value.code == ExitCode.FAILURE
        err = capsys.readouterr().err
        assert "Error: fatal: not a git repository" in err
        assert "Operation: status" in err

    def test_gitdesk_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info, cli_error_handler():
            raise SshError("Invalid host name: 'a b'")

        assert exc_info.value.code == ExitCode.FAILURE
        assert "Invalid host name" in capsys.readouterr().err

    def test_unexpected_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info, cli_error_handler():
            raise RuntimeError("boom")

        assert exc_info.value.code == ExitCode.FAILURE
        assert "Error: boom" in capsys.readouterr().err

    def test_system_exit_passes_through(self) -> None:
        with pytest.raises(SystemExit) as exc_info, cli_error_handler():
            raise SystemExit(ExitCode.USAGE)

        assert exc_info.value.code == ExitCode.USAGE
