"""Helpers for keeping a repository's .gitignore in shape."""

from __future__ import annotations

from pathlib import Path

from gitdesk.constants import DEFAULT_GITIGNORE_ENTRY
from gitdesk.logging import get_logger
from gitdesk.utils.atomic import atomic_write_text

logger = get_logger(__name__)

__all__ = ["ensure_gitignore_entry"]


def _equivalent(line: str, entry: str) -> bool:
    return line.strip().strip("/") == entry.strip().strip("/")


def ensure_gitignore_entry(
    repo_path: Path | str,
    entry: str = DEFAULT_GITIGNORE_ENTRY,
) -> bool:
    """Make sure *entry* is ignored by the repository's .gitignore.

    ``node_modules`` and ``node_modules/`` count as the same entry.

    Args:
        repo_path: Repository root.
        entry: Ignore pattern to add.

    Returns:
        True if .gitignore was created or changed, False if it already
        contained the entry.
    """
    gitignore = Path(repo_path) / ".gitignore"
    content = gitignore.read_text(encoding="utf-8") if gitignore.exists() else ""

    if any(_equivalent(line, entry) for line in content.splitlines()):
        return False

    if content and not content.endswith("\n"):
        content += "\n"
    atomic_write_text(gitignore, f"{content}{entry}\n", mkdir=False)
    logger.info("gitignore_entry_added", path=str(gitignore), entry=entry)
    return True
