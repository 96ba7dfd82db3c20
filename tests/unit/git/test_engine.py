"""Tests for engine bindings and the binding registry."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest
from git import Git

from gitdesk.exceptions import EngineError, GitNotFoundError
from gitdesk.git.engine import EngineBinding, EngineRegistry, normalize_path


class TestEngineRegistry:
    def test_same_path_same_binding(self, temp_git_repo: Path) -> None:
        registry = EngineRegistry()

        first = registry.get_or_create(temp_git_repo)
        second = registry.get_or_create(str(temp_git_repo) + "/")
        third = registry.get_or_create(temp_git_repo / ".")

        assert first is second is third
        assert len(registry) == 1
        assert temp_git_repo in registry

    def test_different_paths_different_bindings(
        self, temp_git_repo: Path, non_git_dir: Path
    ) -> None:
        registry = EngineRegistry()

        assert registry.get_or_create(temp_git_repo) is not registry.get_or_create(
            non_git_dir
        )
        assert len(registry) == 2

    def test_clear_drops_bindings(self, temp_git_repo: Path) -> None:
        registry = EngineRegistry()
        old = registry.get_or_create(temp_git_repo)

        registry.clear()

        assert len(registry) == 0
        assert registry.get(temp_git_repo) is None
        assert registry.get_or_create(temp_git_repo) is not old

    def test_transient_not_cached(self, tmp_path: Path) -> None:
        registry = EngineRegistry()
        binding = registry.transient(tmp_path)

        assert binding.path == normalize_path(tmp_path)
        assert len(registry) == 0

    def test_block_timeout_passed_to_bindings(self, temp_git_repo: Path) -> None:
        registry = EngineRegistry(block_timeout=600)
        assert registry.get_or_create(temp_git_repo).timeout == 600

    def test_concurrent_get_or_create(self, temp_git_repo: Path) -> None:
        registry = EngineRegistry()
        seen: list[EngineBinding] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            seen.append(registry.get_or_create(temp_git_repo))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(binding) for binding in seen}) == 1


class TestEngineBinding:
    def test_execute_returns_stdout(self, temp_git_repo: Path) -> None:
        binding = EngineBinding(temp_git_repo)
        assert binding.execute("rev-list", "--count", "HEAD").strip() == "1"

    def test_failure_carries_git_message(self, non_git_dir: Path) -> None:
        binding = EngineBinding(non_git_dir)

        with pytest.raises(EngineError) as exc_info:
            binding.execute("status")

        assert "not a git repository" in exc_info.value.message
        assert exc_info.value.operation == "status"
        assert exc_info.value.exit_status != 0

    def test_current_branch_without_commits(self, empty_git_repo: Path) -> None:
        assert EngineBinding(empty_git_repo).current_branch() == "main"

    def test_current_branch(self, temp_git_repo: Path) -> None:
        binding = EngineBinding(temp_git_repo)
        binding.execute("checkout", "-b", "feature/x")
        assert binding.current_branch() == "feature/x"

    def test_missing_git_binary(
        self, temp_git_repo: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(Git, "GIT_PYTHON_GIT_EXECUTABLE", "/nonexistent/bin/git")

        with pytest.raises(GitNotFoundError):
            EngineBinding(temp_git_repo).execute("status")
