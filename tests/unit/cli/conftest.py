"""Shared fixtures for CLI command tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def cli_env(
    clean_env: None, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Isolate the CLI from the real home directory and config files.

    Runs in an empty working directory and points the SSH directory and the
    preference file into tmp_path.

    Returns:
        The temporary home directory.
    """
    home = tmp_path / "home"
    workdir = tmp_path / "work"
    home.mkdir()
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.setenv("GITDESK_SSH__SSH_DIR", str(home / ".ssh"))
    monkeypatch.setenv("GITDESK_PREFERENCES__PATH", str(home / "preferences.json"))
    return home
