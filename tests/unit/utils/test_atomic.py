"""Unit tests for atomic file write utilities."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gitdesk.utils.atomic import atomic_write_json, atomic_write_text


class TestAtomicWriteText:
    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        file_path = tmp_path / "ssh" / "nested" / "known_hosts"

        atomic_write_text(file_path, "github.com ssh-rsa AAAA\n")

        assert file_path.read_text() == "github.com ssh-rsa AAAA\n"

    def test_overwrites_existing(self, tmp_path: Path) -> None:
        file_path = tmp_path / ".gitignore"
        file_path.write_text("dist/\n")

        atomic_write_text(file_path, "dist/\nnode_modules/\n")

        assert file_path.read_text() == "dist/\nnode_modules/\n"

    def test_fails_without_mkdir_if_parent_missing(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            atomic_write_text(tmp_path / "missing" / "file.txt", "x", mkdir=False)

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        atomic_write_text(tmp_path / "a.txt", "one")
        atomic_write_text(str(tmp_path / "a.txt"), "two")

        assert [p.name for p in tmp_path.iterdir()] == ["a.txt"]


class TestAtomicWriteJson:
    def test_round_trips_unicode(self, tmp_path: Path) -> None:
        file_path = tmp_path / "prefs" / "preferences.json"
        data = {"gitRepos": "[]", "theme": "dunkel-ü"}

        atomic_write_json(file_path, data)

        text = file_path.read_text(encoding="utf-8")
        assert "dunkel-ü" in text
        assert json.loads(text) == data

    def test_compact(self, tmp_path: Path) -> None:
        file_path = tmp_path / "data.json"

        atomic_write_json(file_path, {"a": 1}, indent=None)

        assert file_path.read_text() == '{"a": 1}'

    def test_unserializable_leaves_file_untouched(self, tmp_path: Path) -> None:
        file_path = tmp_path / "data.json"
        file_path.write_text("{}")

        with pytest.raises(TypeError):
            atomic_write_json(file_path, {"bad": object()})

        assert file_path.read_text() == "{}"
