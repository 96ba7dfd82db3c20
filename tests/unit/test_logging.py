"""Tests for the gitdesk.logging module."""

from __future__ import annotations

import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog

from gitdesk.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_custom_level(self) -> None:
        configure_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_level_from_env(self) -> None:
        """Test log level from GITDESK_LOG_LEVEL env var."""
        with patch.dict(os.environ, {"GITDESK_LOG_LEVEL": "ERROR"}):
            configure_logging()

        assert logging.getLogger().level == logging.ERROR

    def test_unknown_level_name_falls_back_to_info(self) -> None:
        with patch.dict(os.environ, {"GITDESK_LOG_LEVEL": "chatty"}):
            configure_logging()

        assert logging.getLogger().level == logging.INFO

    def test_single_stderr_handler(self) -> None:
        configure_logging()
        configure_logging()

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)


class TestLogOutput:
    """Log lines go to stderr and never to stdout."""

    def test_json_output_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(force_json=True, level=logging.INFO)
        clear_context()

        get_logger("gitdesk.test").info("git_operation_started", operation="status")

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "git_operation_started"
        assert record["operation"] == "status"
        assert record["level"] == "info"

    def test_level_filters_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(force_json=True, level=logging.WARNING)

        get_logger("gitdesk.test").info("quiet_event")

        assert "quiet_event" not in capsys.readouterr().err


class TestContextBinding:
    """Tests for context binding functions."""

    def test_bind_and_clear_context(self) -> None:
        configure_logging()
        clear_context()

        bind_context(operation="push", repo_path="/work/project")
        ctx = structlog.contextvars.get_contextvars()
        assert ctx == {"operation": "push", "repo_path": "/work/project"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_bound_context_in_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(force_json=True, level=logging.INFO)
        clear_context()
        bind_context(repo_path="/work/project")
        try:
            get_logger("gitdesk.test").info("context_event")
        finally:
            clear_context()

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["repo_path"] == "/work/project"
