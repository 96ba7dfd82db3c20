"""Fixtures for the SSH helper tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from gitdesk.config import SshConfig
from gitdesk.runners import CommandResult, CommandRunner


@pytest.fixture
def ssh_config(tmp_path: Path) -> SshConfig:
    return SshConfig(ssh_dir=tmp_path / "ssh")


@pytest.fixture
def mock_runner() -> MagicMock:
    """CommandRunner whose ``run`` is an AsyncMock; every call fails by default."""
    runner = MagicMock(spec=CommandRunner)
    runner.run = AsyncMock(
        return_value=CommandResult(
            returncode=1, stdout="", stderr="no route to host", duration_ms=5
        )
    )
    return runner
