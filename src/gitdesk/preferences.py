"""User preference store and the recent repository list.

The store is a single JSON object mapping keys to string values, the same
shape a browser ``localStorage`` holds, so the recent repository list keeps
its historical encoding: a JSON array stored as a string under ``gitRepos``.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gitdesk.constants import MAX_RECENT_REPOSITORIES, RECENT_REPOSITORIES_KEY
from gitdesk.git.engine import normalize_path
from gitdesk.logging import get_logger
from gitdesk.utils.atomic import atomic_write_json

logger = get_logger(__name__)

__all__ = [
    "PreferenceStore",
    "RecentRepositories",
    "RecentRepository",
]


class PreferenceStore:
    """Key -> string value store persisted as one JSON file.

    Every write rewrites the file atomically. A missing or unreadable file
    reads as an empty store.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("preferences_unreadable", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("preferences_not_a_mapping", path=str(self.path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        atomic_write_json(self.path, data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            atomic_write_json(self.path, data)

    def keys(self) -> list[str]:
        return list(self._load())


class RecentRepository(BaseModel):
    """One entry of the recent repository list.

    Attributes:
        id: Millisecond timestamp of when the entry was added.
        name: Last path component, shown as the display name.
        path: Repository path as opened.
        status: Working tree status label, "clean" when unknown.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(default_factory=lambda: int(time.time() * 1000))
    name: str
    path: str
    status: str = "clean"

    @classmethod
    def for_path(cls, path: Path | str, status: str = "clean") -> RecentRepository:
        text = str(path)
        name = Path(text.rstrip("/\\")).name or text
        return cls(name=name, path=text, status=status)


class RecentRepositories:
    """Most recently opened repositories, newest first.

    Paths are unique (compared after expanding and resolving them). Adding
    a path already in the list moves it to the front; adding beyond the
    limit evicts the oldest entry.
    """

    def __init__(
        self, store: PreferenceStore, limit: int = MAX_RECENT_REPOSITORIES
    ) -> None:
        self._store = store
        self.limit = limit

    def list(self) -> list[RecentRepository]:
        raw = self._store.get(RECENT_REPOSITORIES_KEY)
        if not raw:
            return []
        try:
            items: Any = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("recent_repositories_corrupt", error=str(e))
            return []
        if not isinstance(items, list):
            return []

        entries = []
        for item in items:
            try:
                entries.append(RecentRepository.model_validate(item))
            except ValidationError:
                logger.debug("recent_repository_skipped", item=item)
        return entries[: self.limit]

    def add(self, path: Path | str, status: str = "clean") -> RecentRepository:
        entry = RecentRepository.for_path(path, status)
        key = _path_key(entry.path)
        others = [e for e in self.list() if _path_key(e.path) != key]
        self._save([entry, *others][: self.limit])
        return entry

    def remove(self, path: Path | str) -> bool:
        key = _path_key(str(path))
        entries = self.list()
        kept = [e for e in entries if _path_key(e.path) != key]
        if len(kept) == len(entries):
            return False
        self._save(kept)
        return True

    def clear(self) -> None:
        self._store.remove(RECENT_REPOSITORIES_KEY)

    def _save(self, entries: list[RecentRepository]) -> None:
        payload = [e.model_dump(mode="json") for e in entries]
        self._store.set(RECENT_REPOSITORIES_KEY, json.dumps(payload))


def _path_key(path: str) -> str:
    return str(normalize_path(path))
