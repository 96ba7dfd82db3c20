from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from git import Repo

from gitdesk.config import GitDeskConfig

if TYPE_CHECKING:
    from click.testing import CliRunner


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for the test environment.

    Runs for every test so log output goes to stderr at WARNING level and
    never mixes with the stdout a test inspects.
    """
    from gitdesk.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all GITDESK_ environment variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("GITDESK_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def gitdesk_config(tmp_path: Path) -> GitDeskConfig:
    """Configuration whose SSH directory and preference file live in tmp_path."""
    return GitDeskConfig(
        ssh={"ssh_dir": tmp_path / "ssh", "allow_builtin_host_keys": True},
        preferences={"path": tmp_path / "prefs" / "preferences.json"},
    )


def _configure_identity(repo: Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("user", "name", "Test User")
        writer.set_value("commit", "gpgsign", "false")
        writer.set_value("tag", "gpgsign", "false")


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """Initialized repository on branch main without any commit."""
    repo_path = tmp_path / "empty"
    repo_path.mkdir()
    repo = Repo.init(repo_path, initial_branch="main")
    _configure_identity(repo)
    return repo_path


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository on branch main with one commit.

    Yields:
        Path to the temporary git repository.
    """
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = Repo.init(repo_path, initial_branch="main")
    _configure_identity(repo)

    readme = repo_path / "README.md"
    readme.write_text("# Test Repo\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    yield repo_path


@pytest.fixture
def temp_git_repo_with_remote(
    tmp_path: Path,
) -> Generator[tuple[Path, Path], None, None]:
    """Create a temporary git repository with a bare remote.

    main is pushed and tracks origin/main.

    Yields:
        Tuple of (local_repo_path, remote_repo_path).
    """
    remote_path = tmp_path / "remote.git"
    Repo.init(remote_path, bare=True, initial_branch="main")

    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path, initial_branch="main")
    _configure_identity(repo)
    repo.create_remote("origin", str(remote_path))

    readme = repo_path / "README.md"
    readme.write_text("# Test Repo\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    subprocess.run(
        ["git", "push", "-u", "origin", "HEAD:main"],
        cwd=repo_path,
        check=True,
        capture_output=True,
    )

    yield repo_path, remote_path


@pytest.fixture
def non_git_dir(tmp_path: Path) -> Path:
    """Create a temporary directory that is not a git repository."""
    dir_path = tmp_path / "not_a_repo"
    dir_path.mkdir()
    return dir_path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner.

    Example:
        >>> def test_version(cli_runner):
        ...     from gitdesk.main import cli
        ...     result = cli_runner.invoke(cli, ["--version"])
        ...     assert result.exit_code == 0
    """
    from click.testing import CliRunner

    return CliRunner()
