"""Tests for the .gitignore helper."""

from __future__ import annotations

from pathlib import Path

from gitdesk.git.gitignore import ensure_gitignore_entry


class TestEnsureGitignoreEntry:
    def test_creates_file(self, tmp_path: Path) -> None:
        assert ensure_gitignore_entry(tmp_path) is True
        assert (tmp_path / ".gitignore").read_text() == "node_modules/\n"

    def test_appends_after_existing_content(self, tmp_path: Path) -> None:
        gitignore = tmp_path / ".gitignore"
        gitignore.write_text("*.pyc")

        assert ensure_gitignore_entry(tmp_path, "dist/") is True
        assert gitignore.read_text() == "*.pyc\ndist/\n"

    def test_equivalent_entry_left_alone(self, tmp_path: Path) -> None:
        gitignore = tmp_path / ".gitignore"
        gitignore.write_text("build\n/node_modules\n")

        assert ensure_gitignore_entry(tmp_path) is False
        assert gitignore.read_text() == "build\n/node_modules\n"

    def test_idempotent(self, tmp_path: Path) -> None:
        ensure_gitignore_entry(tmp_path)
        assert ensure_gitignore_entry(tmp_path) is False
        assert (tmp_path / ".gitignore").read_text().count("node_modules") == 1
